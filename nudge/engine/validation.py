"""Pre-persistence validation for Nudge.

Every create/update goes through this gate before it reaches storage. Failures raise
TaskValidationError, which callers can tell apart from storage errors and present as a
field-level correction. Nothing here silently defaults a missing value.
"""

from typing import Optional

from nudge.models.constants import (
    MAX_DURATION_MIN,
    MAX_EXPECTED_UNITS,
    MIN_ACTUAL_UNITS,
    MIN_DURATION_MIN,
    MIN_EXPECTED_UNITS,
    PATTERN_ORDINALS,
    PATTERN_WEEKDAYS,
)
from nudge.models.recurrence import RecurrenceType, RecurringTask
from nudge.models.task import Task, TaskCategory, TaskType


class TaskValidationError(ValueError):
    """A record is missing a required field or carries an out-of-range value."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class RecurringTaskValidationError(TaskValidationError):
    """A recurring definition lacks the parameter its recurrence type needs."""


def apply_task_type_rules(task: Task) -> Task:
    """Apply the fixed properties implied by the task type.

    Commute tasks are always flagged as commute and categorized as transit.

    Args:
        task: Task to normalize (mutated in place)

    Returns:
        The same task
    """
    if task.task_type == TaskType.COMMUTE:
        task.is_commute = True
        task.task_category = TaskCategory.TRANSIT.value
    return task


def validate_task(task: Task) -> None:
    """Validate a task before it is written.

    Rules:
    - UNIT_BASED tasks need `expected_units`.
    - TIME_BASED and COMMUTE tasks need `expected_duration`.
    - Expected and actual values, when present, must be inside their bounds. Zero
      denominators are rejected here so stored tasks always score to a finite number.

    Args:
        task: Task to validate

    Raises:
        TaskValidationError: If a rule is violated
    """
    if not task.name or not task.name.strip():
        raise TaskValidationError("name", "must not be blank")

    if task.task_type == TaskType.UNIT_BASED and task.expected_units is None:
        raise TaskValidationError("expected_units", "is required for unit-based tasks")

    if task.task_type in (TaskType.TIME_BASED, TaskType.COMMUTE) and task.expected_duration is None:
        raise TaskValidationError("expected_duration", "is required for time-based and commute tasks")

    _check_range("expected_duration", task.expected_duration, MIN_DURATION_MIN, MAX_DURATION_MIN)
    _check_range("expected_units", task.expected_units, MIN_EXPECTED_UNITS, MAX_EXPECTED_UNITS)
    _check_range("actual_duration", task.actual_duration, MIN_DURATION_MIN, MAX_DURATION_MIN)
    _check_range("actual_units", task.actual_units, MIN_ACTUAL_UNITS, None)


def _check_range(field: str, value: Optional[int], low: int, high: Optional[int]) -> None:
    if value is None:
        return
    if value < low:
        raise TaskValidationError(field, f"must be at least {low} (got {value})")
    if high is not None and value > high:
        raise TaskValidationError(field, f"must be at most {high} (got {value})")


def validate_recurring_task(recurring_task: RecurringTask) -> None:
    """Validate that a recurring definition carries its type-specific parameter.

    Raises:
        RecurringTaskValidationError: If the parameter is missing or malformed
    """
    if not recurring_task.name or not recurring_task.name.strip():
        raise RecurringTaskValidationError("name", "must not be blank")

    rtype = recurring_task.recurrence_type
    if rtype == RecurrenceType.DAILY:
        if recurring_task.recurrence_interval is None:
            raise RecurringTaskValidationError("recurrence_interval", "is required for daily recurrence")
    elif rtype == RecurrenceType.WEEKLY:
        if not recurring_task.recurrence_days:
            raise RecurringTaskValidationError("recurrence_days", "is required for weekly recurrence")
    elif rtype == RecurrenceType.MONTHLY_DATE:
        if recurring_task.recurrence_day_of_month is None:
            raise RecurringTaskValidationError(
                "recurrence_day_of_month", "is required for monthly-date recurrence"
            )
    elif rtype == RecurrenceType.MONTHLY_PATTERN:
        if not recurring_task.recurrence_pattern:
            raise RecurringTaskValidationError(
                "recurrence_pattern", "is required for monthly-pattern recurrence"
            )
        if not is_valid_monthly_pattern(recurring_task.recurrence_pattern):
            raise RecurringTaskValidationError(
                "recurrence_pattern",
                f"must look like 'first_monday' (got {recurring_task.recurrence_pattern!r})",
            )


def is_valid_monthly_pattern(pattern: str) -> bool:
    """Check a monthly pattern such as "first_monday" or "last_friday"."""
    ordinal, sep, weekday = (pattern or "").partition("_")
    return bool(sep) and ordinal in PATTERN_ORDINALS and weekday in PATTERN_WEEKDAYS
