# lifecycle_peek/tests/test_conf.py

import logging

from lifecycle_peek.conf import (
    DEFAULT_SHOW_BUTTON_CSS_CLASSES,
    LifecyclePeekSettings,
    get_settings,
    load_settings,
    tokenize_css_classes,
)


def test_missing_configuration_uses_defaults():
    assert load_settings(None) == LifecyclePeekSettings()
    assert load_settings({}) == LifecyclePeekSettings()


def test_disabled_classes_not_a_list_means_nothing_disabled(caplog):
    with caplog.at_level(logging.WARNING, logger="lifecycle_peek.conf"):
        cfg = load_settings({"DISABLED_CLASSES": "records.Sample"})

    assert cfg.disabled_classes == ()
    assert cfg.is_disabled("records.Sample") is False
    assert "DISABLED_CLASSES" in caplog.text


def test_malformed_values_degrade_to_defaults():
    cfg = load_settings(
        {
            "SHOW_BUTTON_CSS_CLASSES": ["btn"],
            "HIDE_INTERNAL_STIMULI": "yes",
            "FETCH_TIMEOUT_MS": "soon",
            "UNKNOWN": 1,
        }
    )

    assert cfg.show_button_css_classes == DEFAULT_SHOW_BUTTON_CSS_CLASSES
    assert cfg.hide_internal_stimuli is True
    assert cfg.fetch_timeout_ms == LifecyclePeekSettings().fetch_timeout_ms


def test_non_mapping_configuration_is_ignored():
    assert load_settings(["records.Sample"]) == LifecyclePeekSettings()


def test_disabled_classes_are_trimmed():
    cfg = load_settings({"DISABLED_CLASSES": [" records.Sample ", "", "records.Experiment"]})
    assert cfg.disabled_classes == ("records.Sample", "records.Experiment")


def test_get_settings_reads_live_django_settings(settings):
    settings.LIFECYCLE_PEEK = {"DISABLED_CLASSES": ["records.Experiment"]}
    assert get_settings().disabled_classes == ("records.Experiment",)

    settings.LIFECYCLE_PEEK = {"DISABLED_CLASSES": []}
    assert get_settings().disabled_classes == ()


def test_tokenize_css_classes():
    assert tokenize_css_classes(" a  b ") == ("a", "b")
    assert tokenize_css_classes("btn\tbtn-sm\n") == ("btn", "btn-sm")
    assert tokenize_css_classes("") == ()
