# records/lifecycles.py
"""
Lifecycles of the console's record types.

Keys are source states, values map stimulus -> target state.
"""

from __future__ import annotations

from lifecycle_peek.lifecycle import Lifecycle


# ===============================================================
# SAMPLE LIFECYCLE
# ===============================================================

SAMPLE_LIFECYCLE = Lifecycle.from_mapping(
    state_field="status",
    transitions={
        "REGISTERED": {"start_processing": "IN_PROCESS", "archive": "ARCHIVED"},
        "IN_PROCESS": {"submit_qc": "QC_PENDING", "archive": "ARCHIVED"},
        "QC_PENDING": {"pass_qc": "QC_PASSED", "fail_qc": "QC_FAILED"},
        "QC_PASSED": {"archive": "ARCHIVED", "retention_expired": "ARCHIVED"},
        "QC_FAILED": {"reprocess": "IN_PROCESS", "archive": "ARCHIVED"},
        "ARCHIVED": {},  # terminal
    },
    internal_stimuli={"retention_expired"},
    stimulus_labels={
        "start_processing": "Start processing",
        "submit_qc": "Submit to QC",
        "pass_qc": "Pass QC",
        "fail_qc": "Fail QC",
        "retention_expired": "Retention expired",
    },
)


# ===============================================================
# EXPERIMENT LIFECYCLE
# ===============================================================

EXPERIMENT_LIFECYCLE = Lifecycle.from_mapping(
    state_field="status",
    transitions={
        "PLANNED": {"start": "RUNNING", "cancel": "CANCELLED"},
        "RUNNING": {"pause": "PAUSED", "complete": "COMPLETED", "cancel": "CANCELLED"},
        "PAUSED": {"resume": "RUNNING", "cancel": "CANCELLED", "pause_timeout": "CANCELLED"},
        "COMPLETED": {},
        "CANCELLED": {},
    },
    internal_stimuli={"pause_timeout"},
)
