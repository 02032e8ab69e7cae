"""Task creation factory for Nudge.

This module centralizes task creation logic so every task starts from the same
defaults and carries the properties implied by its type.
"""

from datetime import datetime
from typing import Optional, Dict, Any

from nudge.engine.identity import new_identifier
from nudge.engine.validation import apply_task_type_rules
from nudge.models.task import Task, TaskType, TaskCategory, Priority
from nudge.models.constants import (
    DEFAULT_TASK_CATEGORY,
    DEFAULT_TASK_STATUS,
    DEFAULT_PRIORITY,
)


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary."""
    return {
        "task_category": DEFAULT_TASK_CATEGORY,
        "is_commute": False,
        "status": DEFAULT_TASK_STATUS,
        "priority": DEFAULT_PRIORITY,
    }


def create_task(
    name: str,
    task_type: TaskType,
    expected_duration: Optional[int] = None,
    expected_units: Optional[int] = None,
    task_category: Optional[TaskCategory] = None,
    is_commute: Optional[bool] = None,
    priority: Optional[Priority] = None,
    recurring_task_id: Optional[str] = None,
    category: Optional[str] = None,
    notes: Optional[str] = None,
    deadline: Optional[datetime] = None,
) -> Task:
    """Create a pending task with defaults, allowing overrides.

    The task gets a fresh identifier and timestamps. Commute tasks are forced to
    the transit category. The result is not validated; the repository does that
    at write time.

    Args:
        name: Task name (required)
        task_type: Task type, selects the scoring policy
        expected_duration: Target duration in minutes
        expected_units: Target number of units
        task_category: Task category (defaults to ACTION)
        is_commute: Whether a time-based task is commute-flavored
        priority: Priority (defaults to MEDIUM)
        recurring_task_id: Recurring definition the task belongs to
        category: User-defined tag
        notes: Free-form notes
        deadline: Task deadline

    Returns:
        Task object with defaults applied
    """
    now = datetime.utcnow()
    defaults = create_task_defaults()

    task = Task(
        id=new_identifier(),
        recurring_task_id=recurring_task_id,
        name=name,
        task_type=task_type,
        task_category=task_category if task_category is not None else defaults["task_category"],
        is_commute=is_commute if is_commute is not None else defaults["is_commute"],
        status=defaults["status"],
        priority=priority if priority is not None else defaults["priority"],
        expected_duration=expected_duration,
        expected_units=expected_units,
        category=category,
        notes=notes,
        deadline=deadline,
        created_at=now,
        updated_at=now,
    )

    return apply_task_type_rules(task)
