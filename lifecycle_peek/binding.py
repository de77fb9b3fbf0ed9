# lifecycle_peek/binding.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from django.utils.html import json_script
from django.utils.safestring import SafeString
from django.utils.text import slugify
from django.utils.translation import gettext

from .conf import DEFAULT_FETCH_TIMEOUT_MS, LifecyclePeekSettings, get_settings, tokenize_css_classes
from .variants import Variant, variant_profile

logger = logging.getLogger(__name__)


READ_ONLY_FLAG = "true"


@dataclass(frozen=True)
class ObjectLifecycleContext:
    object_class: str
    object_id: str
    state_attribute_code: str
    current_state: str


@dataclass(frozen=True)
class WidgetDictionary:
    show_button_tooltip: str
    modal_title: str
    modal_close_label: str

    def as_wire(self) -> Dict[str, str]:
        return {
            "show_button_tooltip": self.show_button_tooltip,
            "modal_title": self.modal_title,
            "modal_close_button_label": self.modal_close_label,
        }


@dataclass(frozen=True)
class WidgetConfig:
    endpoint_url: str
    show_button_css_classes: Tuple[str, ...]
    dictionary: WidgetDictionary
    preloaded_content: Optional[str] = None
    fetch_timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS


def _css_char(ch: str) -> str:
    if ch in "\\\"":
        return "\\" + ch
    if ord(ch) < 0x20 or ord(ch) == 0x7F:
        # Control characters only survive as hex escapes, terminated by a space.
        return f"\\{ord(ch):x} "
    return ch


def _css_string(value: str) -> str:
    return '"' + "".join(_css_char(ch) for ch in str(value)) + '"'


@dataclass(frozen=True)
class BindingTarget:
    """
    Where the widget attaches: the read-only state field inside the
    element describing one object.
    """

    object_class: str
    object_id: str
    attribute_code: str

    @property
    def selector(self) -> str:
        return (
            f"[data-object-class={_css_string(self.object_class)}]"
            f"[data-object-id={_css_string(self.object_id)}] "
            f"[data-attribute-code={_css_string(self.attribute_code)}]"
            f"[data-attribute-flag-read-only={_css_string(READ_ONLY_FLAG)}]"
        )

    def _is_container(self, node) -> bool:
        return (
            node.get_attr("data-object-class") == self.object_class
            and node.get_attr("data-object-id") == self.object_id
        )

    def _is_field(self, node) -> bool:
        return (
            node.get_attr("data-attribute-code") == self.attribute_code
            and node.get_attr("data-attribute-flag-read-only") == READ_ONLY_FLAG
        )

    def find_all(self, root) -> list:
        """
        Same matches as ``selector`` would give, over a dom.Node tree.
        """
        found = []
        for container in root.iter():
            if not self._is_container(container):
                continue
            for node in container.iter():
                if node is not container and self._is_field(node) and node not in found:
                    found.append(node)
        return found


@dataclass(frozen=True)
class BindingInstruction:
    variant: Variant
    target: BindingTarget
    context: ObjectLifecycleContext
    config: WidgetConfig

    @property
    def widget_name(self) -> str:
        return variant_profile(self.variant).widget_name

    @property
    def element_id(self) -> str:
        return "lifecycle-peek-binding-" + slugify(
            f"{self.context.object_class}-{self.context.object_id}"
        )

    def widget_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "object_class": self.context.object_class,
            "object_id": self.context.object_id,
            "object_state": self.context.current_state,
            "show_button_css_classes": list(self.config.show_button_css_classes),
            "endpoint": self.config.endpoint_url,
            "dict": self.config.dictionary.as_wire(),
            "fetch_timeout_ms": self.config.fetch_timeout_ms,
        }
        if self.config.preloaded_content is not None:
            options["content"] = self.config.preloaded_content
        return options

    def to_dict(self) -> Dict[str, Any]:
        return {
            "widget": self.widget_name,
            "variant": self.variant.value,
            "selector": self.target.selector,
            "options": self.widget_options(),
        }

    def to_html(self) -> SafeString:
        """
        JSON data island picked up by lifecycle_peek.js. Every field goes
        through json_script escaping; nothing is formatted into script text.
        """
        return json_script(self.to_dict(), self.element_id)


class BindingSnippetBuilder:
    def __init__(
        self,
        endpoint_url: str,
        settings_provider: Callable[[], LifecyclePeekSettings] = get_settings,
        translate: Callable[[str], str] = gettext,
    ):
        self.endpoint_url = endpoint_url
        self.settings_provider = settings_provider
        self.translate = translate

    def show_button_css_classes(self) -> Tuple[str, ...]:
        return tokenize_css_classes(self.settings_provider().show_button_css_classes)

    def dictionary(self) -> WidgetDictionary:
        _ = self.translate
        return WidgetDictionary(
            show_button_tooltip=_("Show lifecycle"),
            modal_title=_("Lifecycle"),
            modal_close_label=_("Close"),
        )

    def build_binding(
        self,
        context: ObjectLifecycleContext,
        variant: Variant,
        preloaded_content: Optional[str] = None,
    ) -> BindingInstruction:
        config = WidgetConfig(
            endpoint_url=self.endpoint_url,
            show_button_css_classes=self.show_button_css_classes(),
            dictionary=self.dictionary(),
            preloaded_content=preloaded_content,
            fetch_timeout_ms=self.settings_provider().fetch_timeout_ms,
        )
        target = BindingTarget(
            object_class=context.object_class,
            object_id=context.object_id,
            attribute_code=context.state_attribute_code,
        )

        logger.debug(
            "Lifecycle peek binding for %s #%s (%s)",
            context.object_class,
            context.object_id,
            Variant(variant).value,
        )
        return BindingInstruction(
            variant=Variant(variant),
            target=target,
            context=context,
            config=config,
        )
