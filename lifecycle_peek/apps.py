# lifecycle_peek/apps.py

from django.apps import AppConfig


class LifecyclePeekConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "lifecycle_peek"
    verbose_name = "Lifecycle peek"

    def ready(self):
        # Register Django system checks only
        from . import checks  # noqa
