# lifecycle_peek/tests/test_registry.py

import pytest
from django.core.exceptions import ImproperlyConfigured

from lifecycle_peek.checks import check_lifecycle_metadata
from lifecycle_peek.eligibility import EligibilityResolver
from lifecycle_peek.lifecycle import Lifecycle
from lifecycle_peek.registry import ModelRegistry
from records.models import Sample


def test_model_roots_and_children():
    registry = ModelRegistry()

    roots = registry.root_classes()
    assert "records.Sample" in roots
    assert "records.Experiment" in roots
    assert "records.ReferenceSample" not in roots

    assert registry.child_classes("records.Sample") == ["records.ReferenceSample"]
    assert registry.child_classes("records.Experiment") == []


def test_state_attribute_codes():
    registry = ModelRegistry()

    assert registry.state_attribute_code("records.Sample") == "status"
    assert registry.state_attribute_code("records.ReferenceSample") == "status"
    assert registry.state_attribute_code("records.Project") == ""
    assert registry.state_attribute_code("auth.User") == ""


def test_class_name_of_instance_and_class():
    registry = ModelRegistry()
    assert registry.class_name_of(Sample) == "records.Sample"
    assert registry.class_name_of(Sample(sample_id="S-1")) == "records.Sample"


def test_unknown_class_raises_lookup_error():
    registry = ModelRegistry()

    with pytest.raises(LookupError):
        registry.get_class("records.Nope")
    with pytest.raises(LookupError):
        registry.get_class("not-a-label")


def test_lifecycle_naming_missing_field_is_fatal(monkeypatch):
    broken = Lifecycle(state_field="phase", states=("a",))
    monkeypatch.setattr(Sample, "lifecycle", broken)

    registry = ModelRegistry()
    with pytest.raises(ImproperlyConfigured):
        registry.state_attribute_code("records.Sample")

    errors = check_lifecycle_metadata(None)
    assert {e.id for e in errors} == {"lifecycle_peek.E001"}


def test_enum_eligible_classes_over_models(settings):
    settings.LIFECYCLE_PEEK = {"DISABLED_CLASSES": ["records.Experiment"]}
    resolver = EligibilityResolver(ModelRegistry())

    eligible = resolver.enum_eligible_classes()

    assert eligible == {
        "records.Sample": "status",
        "records.ReferenceSample": "status",
        "records.Experiment": "status",
    }
    keys = list(eligible)
    assert keys.index("records.Sample") < keys.index("records.ReferenceSample")


def test_check_warns_about_unknown_disabled_class(settings):
    settings.LIFECYCLE_PEEK = {"DISABLED_CLASSES": ["records.Ghost"]}

    errors = check_lifecycle_metadata(None)

    assert [e.id for e in errors] == ["lifecycle_peek.W001"]
