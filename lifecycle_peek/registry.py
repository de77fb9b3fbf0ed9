# lifecycle_peek/registry.py

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Type

from django.apps import apps
from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured
from django.db import models

from .lifecycle import Lifecycle


class ClassMetadataProvider(Protocol):
    """
    Read-only view of the host class hierarchy.

    Class names are opaque strings; the Django registry uses model labels
    such as ``records.Sample``.
    """

    def root_classes(self) -> List[str]: ...

    def child_classes(self, class_name: str) -> List[str]: ...

    def class_name_of(self, obj: Any) -> str: ...

    def state_attribute_code(self, class_name: str) -> str: ...

    def lifecycle(self, class_name: str) -> Optional[Lifecycle]: ...

    def get_class(self, class_name: str) -> Type: ...


class ModelRegistry:
    """
    ClassMetadataProvider backed by the Django app registry.

    - Root classes are concrete models that do not subclass another
      registered model.
    - Child classes are every registered model subclassing a root, in
      registry order (multi-table children and proxies alike).
    - The state attribute is the ``state_field`` of the model's
      ``lifecycle`` attribute.
    """

    def __init__(self, app_registry=None):
        self._apps = app_registry or apps

    def _models(self) -> List[Type[models.Model]]:
        return list(self._apps.get_models())

    def get_class(self, class_name: str) -> Type[models.Model]:
        try:
            return self._apps.get_model(class_name)
        except ValueError as exc:
            raise LookupError(f"Invalid class name: {class_name!r}") from exc

    def class_name_of(self, obj: Any) -> str:
        model = obj if isinstance(obj, type) else type(obj)
        return model._meta.label

    def root_classes(self) -> List[str]:
        all_models = self._models()
        roots = []
        for model in all_models:
            if any(other is not model and issubclass(model, other) for other in all_models):
                continue
            roots.append(model._meta.label)
        return roots

    def child_classes(self, class_name: str) -> List[str]:
        root = self.get_class(class_name)
        return [
            model._meta.label
            for model in self._models()
            if model is not root and issubclass(model, root)
        ]

    def lifecycle(self, class_name: str) -> Optional[Lifecycle]:
        model = self.get_class(class_name)
        lc = getattr(model, "lifecycle", None)
        if lc is None:
            return None
        if not isinstance(lc, Lifecycle):
            raise ImproperlyConfigured(
                f"{class_name}.lifecycle must be a Lifecycle instance, got {type(lc).__name__}."
            )

        try:
            model._meta.get_field(lc.state_field)
        except FieldDoesNotExist as exc:
            raise ImproperlyConfigured(
                f"{class_name} declares lifecycle state field '{lc.state_field}' "
                "but the model has no such field."
            ) from exc

        return lc

    def state_attribute_code(self, class_name: str) -> str:
        lc = self.lifecycle(class_name)
        return lc.state_field if lc else ""
