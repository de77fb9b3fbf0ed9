# lifecycle_peek/dom.py
"""
Minimal element tree used by the server-side widget model.

Only what the widget touches is modelled: attributes, CSS classes,
children, inline content, visibility and event listeners.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from django.utils.html import escape, format_html_join
from django.utils.safestring import mark_safe


class Node:
    def __init__(
        self,
        tag: str = "div",
        attrs: Optional[Dict[str, str]] = None,
        classes: Optional[List[str]] = None,
        children: Optional[List["Node"]] = None,
        text: str = "",
    ):
        self.tag = tag
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.classes: List[str] = list(classes or [])
        self.children: List[Node] = []
        self.parent: Optional[Node] = None
        self.text = text
        self.html = ""
        self.hidden = False
        self.listeners: Dict[str, List[Callable]] = {}

        for child in children or []:
            self.append(child)

    def __repr__(self):
        return f"<Node {self.tag} {' '.join(self.classes)}>"

    # -----------------------------
    # Attributes and classes
    # -----------------------------

    def get_attr(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    def set_attr(self, name: str, value: str) -> None:
        self.attrs[name] = str(value)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, *names: str) -> None:
        for name in names:
            if name and name not in self.classes:
                self.classes.append(name)

    def remove_class(self, *names: str) -> None:
        self.classes = [c for c in self.classes if c not in names]

    # -----------------------------
    # Tree
    # -----------------------------

    def append(self, child: "Node") -> "Node":
        if child.parent is not None:
            child.detach()
        child.parent = self
        self.children.append(child)
        return child

    def detach(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def iter(self) -> Iterator["Node"]:
        yield self
        for child in self.children:
            yield from child.iter()

    def find_by_class(self, name: str) -> Optional["Node"]:
        for node in self.iter():
            if node is not self and node.has_class(name):
                return node
        return None

    # -----------------------------
    # Events
    # -----------------------------

    def on(self, event: str, handler: Callable) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def off(self, event: Optional[str] = None) -> None:
        if event is None:
            self.listeners.clear()
        else:
            self.listeners.pop(event, None)

    def trigger(self, event: str) -> None:
        for handler in list(self.listeners.get(event, [])):
            handler(self)

    # -----------------------------
    # Output
    # -----------------------------

    def render(self) -> str:
        attrs = dict(self.attrs)
        if self.classes:
            attrs["class"] = " ".join(self.classes)
        if self.hidden:
            attrs["hidden"] = "hidden"

        attr_html = format_html_join("", ' {}="{}"', sorted(attrs.items()))
        inner = escape(self.text) + self.html + "".join(c.render() for c in self.children)
        return mark_safe(f"<{self.tag}{attr_html}>{inner}</{self.tag}>")
