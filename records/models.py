from django.db import models

from .lifecycles import EXPERIMENT_LIFECYCLE, SAMPLE_LIFECYCLE


def _choices(lifecycle):
    return [(s, s.replace("_", " ").title()) for s in lifecycle.states]


# ---------------------------------------------------------------------
# Base: adds created_at / updated_at to every model
# ---------------------------------------------------------------------
class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# ---------------------------------------------------------------------
# Project (no lifecycle)
# ---------------------------------------------------------------------
class Project(TimeStampedModel):
    """A research project or study."""
    name = models.CharField(max_length=255, unique=True, db_index=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ["-created_at"]


# ---------------------------------------------------------------------
# Sample
# ---------------------------------------------------------------------
class Sample(TimeStampedModel):
    """Any biological or lab sample tracked in the system."""

    lifecycle = SAMPLE_LIFECYCLE

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="samples", db_index=True)
    sample_id = models.CharField(max_length=100, unique=True, db_index=True)
    sample_type = models.CharField(max_length=20, default="OTHER")
    status = models.CharField(
        max_length=20,
        choices=_choices(SAMPLE_LIFECYCLE),
        default=SAMPLE_LIFECYCLE.start_state,
        db_index=True,
    )
    storage_location = models.CharField(max_length=255, blank=True)

    def __str__(self):
        return f"{self.sample_id} ({self.sample_type})"

    class Meta:
        ordering = ["-created_at"]


class ReferenceSample(Sample):
    """Certified reference material; shares the sample lifecycle."""
    certificate_number = models.CharField(max_length=100, blank=True)


# ---------------------------------------------------------------------
# Experiment
# ---------------------------------------------------------------------
class Experiment(TimeStampedModel):
    """Experimental workflows applied to samples."""

    lifecycle = EXPERIMENT_LIFECYCLE

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="experiments", db_index=True)
    name = models.CharField(max_length=255, db_index=True)
    samples = models.ManyToManyField(Sample, related_name="experiments", blank=True)
    status = models.CharField(
        max_length=20,
        choices=_choices(EXPERIMENT_LIFECYCLE),
        default=EXPERIMENT_LIFECYCLE.start_state,
        db_index=True,
    )

    def __str__(self):
        return f"{self.name} (Project: {self.project.name})"

    class Meta:
        ordering = ["-created_at"]
