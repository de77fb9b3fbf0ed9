# lifecycle_peek/tests/test_variants.py

import pytest

from lifecycle_peek.variants import ExecutionContext, Variant, select_variant, variant_profile


def test_console_selects_backoffice():
    assert select_variant(ExecutionContext.CONSOLE) is Variant.BACKOFFICE
    assert select_variant("console") is Variant.BACKOFFICE


def test_portal_selects_portal():
    assert select_variant(ExecutionContext.PORTAL) is Variant.PORTAL
    assert select_variant("portal") is Variant.PORTAL


def test_selection_is_pure_and_exclusive():
    for flag in ["console", "portal"]:
        results = {select_variant(flag) for _ in range(5)}
        assert len(results) == 1

    assert select_variant("console") != select_variant("portal")


def test_unknown_context_flag_is_rejected():
    with pytest.raises(ValueError):
        select_variant("kiosk")


def test_profiles_differ_only_in_chrome():
    backoffice = variant_profile(Variant.BACKOFFICE)
    portal = variant_profile("portal")

    assert backoffice.widget_name == "lifecycle_peek_backoffice"
    assert portal.widget_name == "lifecycle_peek_portal"
    assert backoffice.marker_class != portal.marker_class
    assert backoffice.button_container_class == "field_data"
