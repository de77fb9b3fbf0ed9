# lifecycle_peek/checks.py

from django.core.checks import Error, Warning, register
from django.core.exceptions import ImproperlyConfigured

from .conf import get_settings
from .registry import ModelRegistry


@register()
def check_lifecycle_metadata(app_configs, **kwargs):
    """
    Django system check: every declared lifecycle must point at a real
    state field, and disabled classes should exist.
    """
    errors = []
    registry = ModelRegistry()

    labels = []
    for root in registry.root_classes():
        labels.append(root)
        labels.extend(registry.child_classes(root))

    for label in labels:
        try:
            registry.state_attribute_code(label)
        except ImproperlyConfigured as exc:
            errors.append(
                Error(
                    f"Inconsistent lifecycle metadata for '{label}'",
                    hint=str(exc),
                    id="lifecycle_peek.E001",
                )
            )

    for label in get_settings().disabled_classes:
        try:
            registry.get_class(label)
        except LookupError:
            errors.append(
                Warning(
                    f"LIFECYCLE_PEEK.DISABLED_CLASSES names unknown class '{label}'",
                    id="lifecycle_peek.W001",
                )
            )

    return errors
