# lifecycle_peek/widget.py
"""
Lifecycle peek widget state machine.

This is the reference model of static/lifecycle_peek/js/lifecycle_peek.js:
same states, same DOM mutations, same options. It runs against a dom.Node
tree, which keeps the behaviour testable without a browser.

    COLLAPSED -> OPENING -> OPEN -> CLOSED -> OPEN ... -> DESTROYED
                    \\-> FAILED (visible error, next open retries)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from django.utils.html import escape
from django.utils.translation import gettext

from .binding import BindingInstruction, ObjectLifecycleContext, WidgetConfig
from .conf import DEFAULT_FETCH_TIMEOUT_MS
from .dom import Node
from .errors import WidgetDestroyedError, WidgetStateError
from .variants import Variant, variant_profile

logger = logging.getLogger(__name__)


TOOLTIP_DELAY_MS = 100
MODAL_WIDTH_RATIO = 0.90
VIEWPORT_MARGIN_PX = 40

SHOW_BUTTON_CLASS = "lifecycle-peek-show-button"
SHOW_BUTTON_ICON = "\u21c4"
IDENTITY_OPTIONS = frozenset({"object_class", "object_id", "object_state"})


class WidgetState(str, Enum):
    COLLAPSED = "collapsed"
    OPENING = "opening"
    OPEN = "open"
    CLOSED = "closed"
    FAILED = "failed"
    DESTROYED = "destroyed"


@dataclass(frozen=True)
class Viewport:
    width: int = 1280
    height: int = 800


@dataclass(frozen=True)
class Tooltip:
    text: str
    delay_ms: int = TOOLTIP_DELAY_MS
    placement: str = "bottom"

    @property
    def position(self) -> Dict[str, str]:
        # Tooltip sits below the button with its tip pointing up at it.
        if self.placement == "bottom":
            return {"my": "top center", "at": "bottom center", "tip": "top center"}
        return {"my": "bottom center", "at": "top center", "tip": "bottom center"}


@dataclass(frozen=True)
class ContentRequest:
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS


# fetcher(request, on_success(content), on_failure(message)); it must not
# block and must call exactly one callback, on_failure on timeout.
Fetcher = Callable[[ContentRequest, Callable[[str], None], Callable[[str], None]], None]


class Modal:
    def __init__(self, node: Node, body: Node, *, title: str, close_label: str, viewport: Viewport):
        self.node = node
        self.body = body
        self.title = title
        self.close_label = close_label
        self.width = int(viewport.width * MODAL_WIDTH_RATIO)
        self.max_width = viewport.width - VIEWPORT_MARGIN_PX
        self.max_height = viewport.height - VIEWPORT_MARGIN_PX
        self.position = {"my": "center top", "at": "center top+10%"}
        self.content: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return not self.node.hidden

    def set_content(self, html: str) -> None:
        self.content = html
        self.body.html = html

    def open(self) -> None:
        self.node.hidden = False

    def close(self) -> None:
        self.node.hidden = True


class ClientWidget:
    def __init__(
        self,
        element: Node,
        context: ObjectLifecycleContext,
        config: WidgetConfig,
        variant: Variant = Variant.BACKOFFICE,
        *,
        viewport: Optional[Viewport] = None,
        fetcher: Optional[Fetcher] = None,
        timeout_ms: Optional[int] = None,
    ):
        self.element = element
        self.context = context
        self.config = config
        self.profile = variant_profile(variant)
        self.viewport = viewport or Viewport()
        self.fetcher = fetcher

        self.options: Dict[str, Any] = {
            "object_class": context.object_class,
            "object_id": context.object_id,
            "object_state": context.current_state,
            "show_button_css_classes": list(config.show_button_css_classes),
            "endpoint": config.endpoint_url,
            "dict": config.dictionary.as_wire(),
            "fetch_timeout_ms": config.fetch_timeout_ms if timeout_ms is None else timeout_ms,
        }

        self.state = WidgetState.COLLAPSED
        self.show_button: Optional[Node] = None
        self.tooltip: Optional[Tooltip] = None
        self.modal: Optional[Modal] = None

        self._content: Optional[str] = config.preloaded_content
        self._initialized = False
        self._marked = False
        self._wants_open = False
        self._fetch_seq = 0

    @classmethod
    def from_binding(cls, element: Node, binding: BindingInstruction, **kwargs) -> "ClientWidget":
        return cls(element, binding.context, binding.config, binding.variant, **kwargs)

    # -----------------------------
    # Guards
    # -----------------------------

    def _ensure_alive(self) -> None:
        if self.state is WidgetState.DESTROYED:
            raise WidgetDestroyedError("Lifecycle widget has been destroyed.")

    @property
    def is_open(self) -> bool:
        return self.modal is not None and self.modal.is_open

    # -----------------------------
    # Lifecycle
    # -----------------------------

    def initialize(self) -> None:
        self._ensure_alive()
        if self._initialized:
            raise WidgetStateError("Lifecycle widget is already initialized.")

        self.element.add_class(self.profile.marker_class)
        self._marked = True

        self._add_show_button()
        self._initialized = True
        self.refresh()

    def _add_show_button(self) -> None:
        tooltip_text = self.options["dict"]["show_button_tooltip"]

        button = Node(
            "button",
            attrs={
                "type": "button",
                "title": tooltip_text,
                "aria-haspopup": "dialog",
                "data-object-state": self.options["object_state"],
            },
            classes=[SHOW_BUTTON_CLASS, *self.options["show_button_css_classes"]],
            text=SHOW_BUTTON_ICON,
        )
        container = self.element.find_by_class(self.profile.button_container_class) or self.element
        container.append(button)
        self.show_button = button

        button.on("click", lambda _node: self.open())
        self.tooltip = Tooltip(text=tooltip_text, placement=self.profile.tooltip_placement)

    def _document_root(self) -> Node:
        root = self.element
        while root.parent is not None:
            root = root.parent
        return root

    def _prepare_modal(self) -> Modal:
        if self.modal is not None:
            return self.modal

        labels = self.options["dict"]
        body = Node("div", classes=["lifecycle-peek-modal-body"])
        close_button = Node("button", attrs={"type": "button"}, text=labels["modal_close_button_label"])
        close_button.on("click", lambda _node: self.close())

        node = Node(
            "div",
            attrs={"role": "dialog", "aria-modal": "true", "aria-label": labels["modal_title"]},
            classes=self.profile.modal_class.split(),
            children=[
                Node("div", classes=["lifecycle-peek-modal-title"], text=labels["modal_title"]),
                body,
                Node("div", classes=["lifecycle-peek-modal-buttons"], children=[close_button]),
            ],
        )
        node.hidden = True
        self._document_root().append(node)

        self.modal = Modal(
            node,
            body,
            title=labels["modal_title"],
            close_label=labels["modal_close_button_label"],
            viewport=self.viewport,
        )
        if self._content is not None:
            self.modal.set_content(self._content)
        return self.modal

    def content_request(self) -> ContentRequest:
        return ContentRequest(
            url=self.options["endpoint"],
            params={
                "object_class": self.context.object_class,
                "object_id": self.context.object_id,
            },
            timeout_ms=self.options["fetch_timeout_ms"],
        )

    def open(self) -> None:
        self._ensure_alive()
        if not self._initialized:
            raise WidgetStateError("Lifecycle widget must be initialized before opening.")

        # A reopen while loading still shows the content once it lands.
        self._wants_open = True

        if self.state in (WidgetState.OPEN, WidgetState.OPENING):
            return

        if self._content is not None:
            self._show()
            return

        if self.fetcher is None:
            self._on_failed(self._fetch_seq, gettext("Lifecycle content is not available."))
            return

        self.state = WidgetState.OPENING
        self._fetch_seq += 1
        seq = self._fetch_seq
        self.fetcher(
            self.content_request(),
            lambda content: self._on_loaded(seq, content),
            lambda message: self._on_failed(seq, message),
        )

    def _show(self) -> None:
        modal = self._prepare_modal()
        modal.open()
        self.state = WidgetState.OPEN

    def _on_loaded(self, seq: int, content: str) -> None:
        if self.state is WidgetState.DESTROYED or seq != self._fetch_seq:
            return
        if not isinstance(content, str):
            self._on_failed(seq, gettext("Lifecycle content is not available."))
            return

        self._content = content
        modal = self._prepare_modal()
        if modal.content != content:
            modal.set_content(content)

        if self._wants_open:
            self._show()
        else:
            self.state = WidgetState.CLOSED

    def _on_failed(self, seq: int, message: str) -> None:
        if self.state is WidgetState.DESTROYED or seq != self._fetch_seq:
            return

        logger.warning(
            "Lifecycle content failed for %s #%s: %s",
            self.context.object_class,
            self.context.object_id,
            message,
        )
        modal = self._prepare_modal()
        modal.set_content(f'<p class="lifecycle-peek-error" role="alert">{escape(message)}</p>')
        if self._wants_open:
            modal.open()
        self.state = WidgetState.FAILED

    def close(self) -> None:
        self._ensure_alive()
        self._wants_open = False

        if self.modal is not None:
            self.modal.close()

        if self.state is WidgetState.OPEN:
            self.state = WidgetState.CLOSED

    def destroy(self) -> None:
        """
        Revert every DOM change made by initialize/open. Only what was
        actually attached is removed, so a half-initialized widget can be
        destroyed too. The element may then be bound again.
        """
        if self.state is WidgetState.DESTROYED:
            return

        if self.modal is not None:
            self.modal.node.detach()
            for node in self.modal.node.iter():
                node.off()
            self.modal = None

        if self.show_button is not None:
            self.show_button.off()
            self.show_button.detach()
            self.show_button = None

        self.tooltip = None

        if self._marked:
            self.element.remove_class(self.profile.marker_class)
            self._marked = False

        self._initialized = False
        self._wants_open = False
        self.state = WidgetState.DESTROYED

    # -----------------------------
    # Options
    # -----------------------------

    def set_options(self, options: Mapping[str, Any]) -> None:
        self._ensure_alive()
        for key, value in options.items():
            self._set_option(key, value)
        self.refresh()

    def set_option(self, key: str, value: Any) -> None:
        self.set_options({key: value})

    def _set_option(self, key: str, value: Any) -> None:
        if key in IDENTITY_OPTIONS:
            raise WidgetStateError(
                f"'{key}' is bound for the widget's lifetime; destroy and recreate to rebind."
            )
        self.options[key] = value

    def refresh(self) -> None:
        """
        Called after initialize and after option changes. Nothing to
        refresh in the base widget.
        """


def find_bound_elements(root: Node, binding: BindingInstruction) -> List[Node]:
    return binding.target.find_all(root)
