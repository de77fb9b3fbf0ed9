# records/admin.py

from django.contrib import admin

from .models import Experiment, Project, ReferenceSample, Sample


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active", "created_at")
    search_fields = ("name",)


@admin.register(Sample)
class SampleAdmin(admin.ModelAdmin):
    list_display = ("sample_id", "sample_type", "status", "project", "created_at")
    list_filter = ("status", "sample_type")
    search_fields = ("sample_id",)


@admin.register(ReferenceSample)
class ReferenceSampleAdmin(SampleAdmin):
    list_display = SampleAdmin.list_display + ("certificate_number",)


@admin.register(Experiment)
class ExperimentAdmin(admin.ModelAdmin):
    list_display = ("name", "status", "project", "created_at")
    list_filter = ("status",)
    search_fields = ("name",)
