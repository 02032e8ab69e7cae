"""Data models for Nudge."""

from nudge.models.task import Task, TaskType, TaskCategory, TaskStatus, Priority
from nudge.models.recurrence import RecurringTask, RecurrenceType, Weekday

__all__ = [
    "Task",
    "TaskType",
    "TaskCategory",
    "TaskStatus",
    "Priority",
    "RecurringTask",
    "RecurrenceType",
    "Weekday",
]
