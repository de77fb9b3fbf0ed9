# lifecycle_peek/variants.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class ExecutionContext(str, Enum):
    CONSOLE = "console"
    PORTAL = "portal"


class Variant(str, Enum):
    BACKOFFICE = "backoffice"
    PORTAL = "portal"


@dataclass(frozen=True)
class VariantProfile:
    """
    What differs between variants. Everything else is shared by the
    single widget state machine.
    """

    variant: Variant
    widget_name: str
    marker_class: str
    button_container_class: str
    tooltip_placement: str
    modal_class: str


PROFILES: Dict[Variant, VariantProfile] = {
    Variant.BACKOFFICE: VariantProfile(
        variant=Variant.BACKOFFICE,
        widget_name="lifecycle_peek_backoffice",
        marker_class="lifecycle_peek_backoffice",
        button_container_class="field_data",
        tooltip_placement="bottom",
        modal_class="lifecycle-peek-dialog",
    ),
    Variant.PORTAL: VariantProfile(
        variant=Variant.PORTAL,
        widget_name="lifecycle_peek_portal",
        marker_class="lifecycle_peek_portal",
        button_container_class="form_field_control",
        tooltip_placement="bottom",
        modal_class="lifecycle-peek-modal modal",
    ),
}


def select_variant(context: Union[ExecutionContext, str]) -> Variant:
    """
    Portal surfaces get the portal widget; everything else is the console.
    """
    if ExecutionContext(context) is ExecutionContext.PORTAL:
        return Variant.PORTAL
    return Variant.BACKOFFICE


def variant_profile(variant: Union[Variant, str]) -> VariantProfile:
    return PROFILES[Variant(variant)]
