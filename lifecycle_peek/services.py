# lifecycle_peek/services.py

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional

from django.urls import reverse
from django.utils.translation import gettext

from .binding import BindingInstruction, BindingSnippetBuilder, ObjectLifecycleContext
from .conf import LifecyclePeekSettings, get_settings
from .eligibility import EligibilityResolver
from .errors import LifecyclePeekError
from .registry import ClassMetadataProvider, ModelRegistry
from .rendering import DiagramRenderer, MermaidRenderer
from .variants import ExecutionContext, select_variant


class LifecyclePeekService:
    """
    Entry point used by views, template tags and checks.

    Collaborators are injected so tests can swap the class registry,
    configuration, renderer or translations.
    """

    def __init__(
        self,
        metadata: Optional[ClassMetadataProvider] = None,
        settings_provider: Callable[[], LifecyclePeekSettings] = get_settings,
        renderer: Optional[DiagramRenderer] = None,
        translate: Callable[[str], str] = gettext,
    ):
        self.metadata = metadata or ModelRegistry()
        self.settings_provider = settings_provider
        self.renderer = renderer or MermaidRenderer()
        self.translate = translate
        self.eligibility = EligibilityResolver(self.metadata, settings_provider)

    # -----------------------------
    # Eligibility
    # -----------------------------

    def is_eligible(self, obj: Any) -> bool:
        return self.eligibility.is_eligible(obj)

    def is_eligible_class(self, class_name: str) -> bool:
        return self.eligibility.is_eligible_class(class_name)

    def enum_eligible_classes(self) -> Dict[str, str]:
        return self.eligibility.enum_eligible_classes()

    # -----------------------------
    # Binding
    # -----------------------------

    def context_for(self, obj: Any) -> ObjectLifecycleContext:
        class_name = self.metadata.class_name_of(obj)
        code = self.metadata.state_attribute_code(class_name)
        if not code:
            raise LifecyclePeekError(f"{class_name} has no lifecycle state attribute.")

        return ObjectLifecycleContext(
            object_class=class_name,
            object_id=str(obj.pk),
            state_attribute_code=code,
            current_state=str(getattr(obj, code, "") or ""),
        )

    def endpoint_url(self, request=None) -> str:
        """
        Absolute URL of the diagram endpoint when rendering for a request.
        Without one (templates rendered offline) the site-relative path is
        returned; the widget resolves it against the page location.
        """
        path = reverse("lifecycle_peek:endpoint")
        if request is not None:
            return request.build_absolute_uri(path)
        return path

    def builder(self, request=None) -> BindingSnippetBuilder:
        return BindingSnippetBuilder(
            endpoint_url=self.endpoint_url(request),
            settings_provider=self.settings_provider,
            translate=self.translate,
        )

    def build_binding(
        self,
        obj: Any,
        *,
        execution_context: ExecutionContext = ExecutionContext.CONSOLE,
        request=None,
        preload: bool = False,
    ) -> Optional[BindingInstruction]:
        """
        Binding instruction for ``obj``, or None when it is not eligible.
        """
        if not self.is_eligible(obj):
            return None

        context = self.context_for(obj)
        content = self.render_diagram(obj) if preload else None

        return self.builder(request).build_binding(
            context,
            select_variant(execution_context),
            preloaded_content=content,
        )

    # -----------------------------
    # Diagram
    # -----------------------------

    def get_object(self, class_name: str, object_id: str):
        model = self.metadata.get_class(class_name)
        return model._default_manager.get(pk=object_id)

    def render_diagram(
        self,
        obj: Any,
        *,
        stimuli_to_hide: Iterable[str] = (),
        hide_internal_stimuli: Optional[bool] = None,
    ) -> str:
        class_name = self.metadata.class_name_of(obj)
        lifecycle = self.metadata.lifecycle(class_name)
        if lifecycle is None:
            raise LifecyclePeekError(f"{class_name} has no lifecycle.")

        if hide_internal_stimuli is None:
            hide_internal_stimuli = self.settings_provider().hide_internal_stimuli

        return self.renderer.render(
            lifecycle,
            str(getattr(obj, lifecycle.state_field, "") or ""),
            stimuli_to_hide=stimuli_to_hide,
            hide_internal_stimuli=hide_internal_stimuli,
        )


def get_service() -> LifecyclePeekService:
    return LifecyclePeekService()
