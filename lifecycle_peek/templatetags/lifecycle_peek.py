# lifecycle_peek/templatetags/lifecycle_peek.py

from __future__ import annotations

from django import template
from django.templatetags.static import static
from django.utils.html import format_html, format_html_join

from lifecycle_peek.middleware import execution_context_for
from lifecycle_peek.services import get_service

register = template.Library()


CSS_FILES = ["lifecycle_peek/css/lifecycle_peek.css"]
JS_FILES = ["lifecycle_peek/js/lifecycle_peek.js"]
MERMAID_URL = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"


@register.simple_tag
def lifecycle_peek_assets():
    """
    Stylesheet and scripts shared by both widget variants. The variant of
    each widget travels in its binding data island.
    """
    css = format_html_join("", '<link rel="stylesheet" href="{}">', ((static(p),) for p in CSS_FILES))
    js = format_html_join("", '<script src="{}" defer></script>', ((static(p),) for p in JS_FILES))
    return css + js + format_html('<script src="{}" defer></script>', MERMAID_URL)


@register.simple_tag(takes_context=True)
def lifecycle_peek_binding(context, obj, preload=False):
    """
    JSON data island binding the widget to ``obj``'s state field.
    Renders nothing for ineligible objects.
    """
    if obj is None:
        return ""

    request = context.get("request")
    binding = get_service().build_binding(
        obj,
        execution_context=execution_context_for(request) if request is not None else "console",
        request=request,
        preload=bool(preload),
    )
    if binding is None:
        return ""
    return binding.to_html()


@register.filter(name="lifecycle_eligible")
def lifecycle_eligible(obj) -> bool:
    if obj is None:
        return False
    return get_service().is_eligible(obj)
