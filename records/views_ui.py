# records/views_ui.py

from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, render

from .models import Experiment, ReferenceSample, Sample


def _detail(request, obj, fields, template="records/detail.html"):
    """
    Record view shared by console and portal. The state field is rendered
    read-only so the lifecycle widget can bind to it.
    """
    lifecycle = getattr(type(obj), "lifecycle", None)
    state_field = lifecycle.state_field if lifecycle else ""
    return render(
        request,
        template,
        {
            "object": obj,
            "object_class": obj._meta.label,
            "title": str(obj),
            "fields": [(obj._meta.get_field(name).verbose_name, getattr(obj, name)) for name in fields],
            "state_field": state_field,
            "state_value": getattr(obj, state_field, "") if state_field else "",
        },
    )


@login_required
def sample_detail(request, pk: int):
    sample = get_object_or_404(Sample, pk=pk)
    return _detail(request, sample, ["sample_id", "sample_type", "storage_location"])


@login_required
def reference_sample_detail(request, pk: int):
    sample = get_object_or_404(ReferenceSample, pk=pk)
    return _detail(request, sample, ["sample_id", "certificate_number"])


@login_required
def experiment_detail(request, pk: int):
    experiment = get_object_or_404(Experiment, pk=pk)
    return _detail(request, experiment, ["name"])


@login_required
def portal_sample_detail(request, pk: int):
    sample = get_object_or_404(Sample, pk=pk)
    return _detail(request, sample, ["sample_id", "sample_type"], template="records/portal_detail.html")
