# lifecycle_peek/lifecycle.py
"""
Lifecycle definitions declared by host models.

A model opts in by exposing a ``lifecycle`` class attribute:

    class Sample(models.Model):
        status = models.CharField(...)

        lifecycle = Lifecycle.from_mapping(
            state_field="status",
            transitions={
                "REGISTERED": {"start_processing": "IN_PROCESS"},
                ...
            },
        )

Subclasses inherit the attribute, so a child model shares its parent's
lifecycle unless it declares its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple


def normalize_state(value: str) -> str:
    return str(value or "").strip()


@dataclass(frozen=True)
class Transition:
    source: str
    stimulus: str
    target: str


@dataclass(frozen=True)
class Lifecycle:
    state_field: str
    states: Tuple[str, ...]
    transitions: Tuple[Transition, ...] = ()
    internal_stimuli: FrozenSet[str] = frozenset()
    stimulus_labels: Mapping[str, str] = field(default_factory=dict)
    initial_state: Optional[str] = None

    def __post_init__(self):
        if not self.state_field:
            raise ValueError("A lifecycle must name its state field.")
        if not self.states:
            raise ValueError("A lifecycle must declare at least one state.")

        known = set(self.states)
        if len(known) != len(self.states):
            raise ValueError("Lifecycle states must be unique.")

        for t in self.transitions:
            if t.source not in known or t.target not in known:
                raise ValueError(
                    f"Transition references unknown state: {t.source} -> {t.target}"
                )

        if self.initial_state is not None and self.initial_state not in known:
            raise ValueError(f"Unknown initial state: {self.initial_state}")

    @classmethod
    def from_mapping(
        cls,
        *,
        state_field: str,
        transitions: Mapping[str, Mapping[str, str]],
        internal_stimuli: Iterable[str] = (),
        stimulus_labels: Optional[Mapping[str, str]] = None,
        initial_state: Optional[str] = None,
    ) -> "Lifecycle":
        """
        Build a lifecycle from ``{state: {stimulus: target_state}}``.

        States are taken in declaration order; targets that never appear as
        a key are appended as terminal states.
        """
        states: List[str] = []
        flat: List[Transition] = []

        for source, edges in transitions.items():
            src = normalize_state(source)
            if src not in states:
                states.append(src)
            for stimulus, target in edges.items():
                flat.append(Transition(src, stimulus, normalize_state(target)))

        for t in flat:
            if t.target not in states:
                states.append(t.target)

        return cls(
            state_field=state_field,
            states=tuple(states),
            transitions=tuple(flat),
            internal_stimuli=frozenset(internal_stimuli),
            stimulus_labels=dict(stimulus_labels or {}),
            initial_state=normalize_state(initial_state) if initial_state else None,
        )

    @property
    def start_state(self) -> str:
        return self.initial_state or self.states[0]

    @property
    def stimuli(self) -> List[str]:
        seen: List[str] = []
        for t in self.transitions:
            if t.stimulus not in seen:
                seen.append(t.stimulus)
        return seen

    @property
    def terminal_states(self) -> List[str]:
        sources = {t.source for t in self.transitions}
        return [s for s in self.states if s not in sources]

    def label_for(self, stimulus: str) -> str:
        return self.stimulus_labels.get(stimulus) or stimulus.replace("_", " ")

    def is_internal(self, stimulus: str) -> bool:
        return stimulus in self.internal_stimuli

    def allowed_next_states(self, current: str) -> List[str]:
        cur = normalize_state(current)
        return sorted({t.target for t in self.transitions if t.source == cur})

    def as_dict(self) -> Dict:
        """
        Stable JSON-serializable definition.
        """
        return {
            "state_field": self.state_field,
            "states": list(self.states),
            "initial_state": self.start_state,
            "terminal_states": self.terminal_states,
            "transitions": [
                {
                    "from": t.source,
                    "stimulus": t.stimulus,
                    "to": t.target,
                    "internal": self.is_internal(t.stimulus),
                }
                for t in self.transitions
            ],
        }


__all__ = [
    "Lifecycle",
    "Transition",
    "normalize_state",
]
