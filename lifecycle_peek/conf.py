# lifecycle_peek/conf.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from django.conf import settings

logger = logging.getLogger(__name__)


SETTINGS_NAME = "LIFECYCLE_PEEK"

DEFAULT_SHOW_BUTTON_CSS_CLASSES = "lifecycle-peek-button"
DEFAULT_HIDE_INTERNAL_STIMULI = True
DEFAULT_PORTAL_PATH_PREFIXES: Tuple[str, ...] = ("/portal/",)
DEFAULT_FETCH_TIMEOUT_MS = 10_000


@dataclass(frozen=True)
class LifecyclePeekSettings:
    """
    Every recognized LIFECYCLE_PEEK key with its default.
    """

    disabled_classes: Tuple[str, ...] = ()
    show_button_css_classes: str = DEFAULT_SHOW_BUTTON_CSS_CLASSES
    hide_internal_stimuli: bool = DEFAULT_HIDE_INTERNAL_STIMULI
    portal_path_prefixes: Tuple[str, ...] = DEFAULT_PORTAL_PATH_PREFIXES
    fetch_timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS

    def is_disabled(self, class_name: str) -> bool:
        return class_name in self.disabled_classes


_KNOWN_KEYS = {
    "DISABLED_CLASSES",
    "SHOW_BUTTON_CSS_CLASSES",
    "HIDE_INTERNAL_STIMULI",
    "PORTAL_PATH_PREFIXES",
    "FETCH_TIMEOUT_MS",
}


def _string_list(raw: Any, key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if raw is None:
        return default
    if not isinstance(raw, (list, tuple)):
        logger.warning("%s.%s must be a list, got %s; ignoring it.", SETTINGS_NAME, key, type(raw).__name__)
        return default
    return tuple(str(x).strip() for x in raw if str(x).strip())


def load_settings(raw: Any) -> LifecyclePeekSettings:
    """
    Validate a raw LIFECYCLE_PEEK mapping.

    Malformed values degrade to their defaults with a warning; a broken
    configuration must never break a record page.
    """
    if raw is None:
        return LifecyclePeekSettings()

    if not isinstance(raw, Mapping):
        logger.warning("%s must be a dict, got %s; using defaults.", SETTINGS_NAME, type(raw).__name__)
        return LifecyclePeekSettings()

    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Unknown %s keys ignored: %s", SETTINGS_NAME, ", ".join(map(str, unknown)))

    disabled = _string_list(raw.get("DISABLED_CLASSES"), "DISABLED_CLASSES", ())
    prefixes = _string_list(
        raw.get("PORTAL_PATH_PREFIXES"), "PORTAL_PATH_PREFIXES", DEFAULT_PORTAL_PATH_PREFIXES
    )

    css = raw.get("SHOW_BUTTON_CSS_CLASSES", DEFAULT_SHOW_BUTTON_CSS_CLASSES)
    if not isinstance(css, str):
        logger.warning("%s.SHOW_BUTTON_CSS_CLASSES must be a string; using default.", SETTINGS_NAME)
        css = DEFAULT_SHOW_BUTTON_CSS_CLASSES

    hide_internal = raw.get("HIDE_INTERNAL_STIMULI", DEFAULT_HIDE_INTERNAL_STIMULI)
    if not isinstance(hide_internal, bool):
        logger.warning("%s.HIDE_INTERNAL_STIMULI must be a bool; using default.", SETTINGS_NAME)
        hide_internal = DEFAULT_HIDE_INTERNAL_STIMULI

    timeout = raw.get("FETCH_TIMEOUT_MS", DEFAULT_FETCH_TIMEOUT_MS)
    try:
        timeout = int(timeout)
    except (TypeError, ValueError):
        logger.warning("%s.FETCH_TIMEOUT_MS must be an integer; using default.", SETTINGS_NAME)
        timeout = DEFAULT_FETCH_TIMEOUT_MS
    if timeout <= 0:
        timeout = DEFAULT_FETCH_TIMEOUT_MS

    return LifecyclePeekSettings(
        disabled_classes=disabled,
        show_button_css_classes=css,
        hide_internal_stimuli=hide_internal,
        portal_path_prefixes=prefixes,
        fetch_timeout_ms=timeout,
    )


def get_settings() -> LifecyclePeekSettings:
    """
    Read the live Django setting on every call (no caching), so
    override_settings and runtime changes are honoured.
    """
    return load_settings(getattr(settings, SETTINGS_NAME, None))


def tokenize_css_classes(value: str) -> Tuple[str, ...]:
    return tuple(token for token in str(value or "").split() if token)
