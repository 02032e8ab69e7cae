"""Core task logic for Nudge: scoring, validation and identity."""

from nudge.engine.scoring import score, scoring_policy
from nudge.engine.validation import (
    TaskValidationError,
    RecurringTaskValidationError,
    apply_task_type_rules,
    validate_task,
    validate_recurring_task,
)
from nudge.engine.identity import new_identifier, assign_identifier_if_absent

__all__ = [
    "score",
    "scoring_policy",
    "TaskValidationError",
    "RecurringTaskValidationError",
    "apply_task_type_rules",
    "validate_task",
    "validate_recurring_task",
    "new_identifier",
    "assign_identifier_if_absent",
]
