# lifecycle_peek/rendering.py

from __future__ import annotations

from typing import Dict, Iterable, List, Protocol

from django.utils.html import format_html

from .lifecycle import Lifecycle, normalize_state


class DiagramRenderer(Protocol):
    def render(
        self,
        lifecycle: Lifecycle,
        current_state: str,
        *,
        stimuli_to_hide: Iterable[str] = (),
        hide_internal_stimuli: bool = False,
    ) -> str: ...


def _state_label(state: str) -> str:
    return state.replace("#", "#35;").replace('"', "#quot;")


class MermaidRenderer:
    """
    Renders a lifecycle as a Mermaid stateDiagram-v2, wrapped in a
    fragment the widget can inject as-is. Mermaid draws it client-side.
    """

    current_style = "fill:#fde68a,stroke:#b45309,stroke-width:2px,font-weight:bold"

    def source(
        self,
        lifecycle: Lifecycle,
        current_state: str,
        *,
        stimuli_to_hide: Iterable[str] = (),
        hide_internal_stimuli: bool = False,
    ) -> str:
        hidden = set(stimuli_to_hide)
        current = normalize_state(current_state)

        # Positional ids: state names may differ only in characters Mermaid
        # ids cannot hold.
        ids: Dict[str, str] = {state: f"s{i}" for i, state in enumerate(lifecycle.states)}

        lines: List[str] = ["stateDiagram-v2"]
        for state in lifecycle.states:
            lines.append(f'  state "{_state_label(state)}" as {ids[state]}')

        lines.append(f"  [*] --> {ids[lifecycle.start_state]}")

        for t in lifecycle.transitions:
            if t.stimulus in hidden:
                continue
            if hide_internal_stimuli and lifecycle.is_internal(t.stimulus):
                continue
            label = lifecycle.label_for(t.stimulus).replace(":", " ")
            lines.append(f"  {ids[t.source]} --> {ids[t.target]} : {label}")

        for state in lifecycle.terminal_states:
            lines.append(f"  {ids[state]} --> [*]")

        if current in lifecycle.states:
            lines.append(f"  classDef current {self.current_style}")
            lines.append(f"  class {ids[current]} current")

        return "\n".join(lines) + "\n"

    def render(
        self,
        lifecycle: Lifecycle,
        current_state: str,
        *,
        stimuli_to_hide: Iterable[str] = (),
        hide_internal_stimuli: bool = False,
    ) -> str:
        src = self.source(
            lifecycle,
            current_state,
            stimuli_to_hide=stimuli_to_hide,
            hide_internal_stimuli=hide_internal_stimuli,
        )
        return format_html(
            '<figure class="lifecycle-peek-diagram" data-current-state="{}">'
            '<pre class="mermaid">{}</pre></figure>',
            normalize_state(current_state),
            src,
        )
