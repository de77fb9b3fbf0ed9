# lifecycle_peek/tests/test_rendering.py

import pytest

from lifecycle_peek.lifecycle import Lifecycle, Transition
from lifecycle_peek.rendering import MermaidRenderer
from records.lifecycles import SAMPLE_LIFECYCLE


def _ids(lifecycle):
    return {state: f"s{i}" for i, state in enumerate(lifecycle.states)}


def test_source_lists_states_transitions_and_terminals():
    src = MermaidRenderer().source(SAMPLE_LIFECYCLE, "QC_PENDING")
    ids = _ids(SAMPLE_LIFECYCLE)

    lines = src.splitlines()
    assert lines[0] == "stateDiagram-v2"
    assert '  state "REGISTERED" as s0' in lines
    assert f"  [*] --> {ids['REGISTERED']}" in lines
    assert f"  {ids['QC_PENDING']} --> {ids['QC_PASSED']} : Pass QC" in lines
    assert f"  {ids['REGISTERED']} --> {ids['ARCHIVED']} : archive" in lines
    assert f"  {ids['ARCHIVED']} --> [*]" in lines
    assert f"  class {ids['QC_PENDING']} current" in lines


def test_hidden_and_internal_stimuli_are_dropped():
    renderer = MermaidRenderer()
    ids = _ids(SAMPLE_LIFECYCLE)

    full = renderer.source(SAMPLE_LIFECYCLE, "QC_PASSED")
    assert "Retention expired" in full

    without_internal = renderer.source(SAMPLE_LIFECYCLE, "QC_PASSED", hide_internal_stimuli=True)
    assert "Retention expired" not in without_internal
    assert f"{ids['QC_PASSED']} --> {ids['ARCHIVED']} : archive" in without_internal

    without_archive = renderer.source(SAMPLE_LIFECYCLE, "QC_PASSED", stimuli_to_hide=["archive"])
    assert ": archive" not in without_archive
    # States stay even when their edges are hidden
    assert f'  state "ARCHIVED" as {ids["ARCHIVED"]}' in without_archive.splitlines()


def test_unknown_current_state_is_not_highlighted():
    src = MermaidRenderer().source(SAMPLE_LIFECYCLE, "LOST")
    assert "classDef current" not in src


def test_states_differing_only_in_punctuation_stay_distinct():
    lifecycle = Lifecycle.from_mapping(
        state_field="s",
        transitions={"IN-PROCESS": {"go": "IN_PROCESS"}, "IN_PROCESS": {}},
    )

    lines = MermaidRenderer().source(lifecycle, "IN-PROCESS").splitlines()

    assert '  state "IN-PROCESS" as s0' in lines
    assert '  state "IN_PROCESS" as s1' in lines
    assert "  s0 --> s1 : go" in lines
    assert "  s1 --> [*]" in lines
    assert "  s0 --> [*]" not in lines
    assert "  class s0 current" in lines


def test_state_names_are_quoted_safely():
    lifecycle = Lifecycle(state_field="s", states=('say "hi"', "#1"))

    lines = MermaidRenderer().source(lifecycle, "#1").splitlines()

    assert '  state "say #quot;hi#quot;" as s0' in lines
    assert '  state "#35;1" as s1' in lines
    assert "  class s1 current" in lines


def test_render_wraps_and_escapes():
    lifecycle = Lifecycle(
        state_field="status",
        states=("new", "done"),
        transitions=(Transition("new", "close", "done"),),
        stimulus_labels={"close": "Close <now> & forever"},
    )

    html = MermaidRenderer().render(lifecycle, "new")

    assert html.startswith('<figure class="lifecycle-peek-diagram" data-current-state="new">')
    assert '<pre class="mermaid">' in html
    assert "s0 --&gt; s1 : Close &lt;now&gt; &amp; forever" in html
    assert "<now>" not in html


def test_lifecycle_rejects_unknown_states():
    with pytest.raises(ValueError):
        Lifecycle(state_field="status", states=("a",), transitions=(Transition("a", "go", "b"),))


def test_lifecycle_from_mapping_collects_terminal_states():
    lifecycle = Lifecycle.from_mapping(
        state_field="state",
        transitions={"new": {"assign": "assigned"}, "assigned": {"resolve": "resolved"}},
    )

    assert lifecycle.states == ("new", "assigned", "resolved")
    assert lifecycle.terminal_states == ["resolved"]
    assert lifecycle.start_state == "new"
    assert lifecycle.allowed_next_states("new") == ["assigned"]
    assert lifecycle.stimuli == ["assign", "resolve"]
