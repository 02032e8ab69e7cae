"""Task data model for Nudge."""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional
from pydantic import BaseModel, Field


class TaskType(str, Enum):
    """Task type enumeration (selects the scoring policy)."""
    UNIT_BASED = "unit_based"
    TIME_BASED = "time_based"
    COMMUTE = "commute"


class TaskCategory(str, Enum):
    """Task category enumeration."""
    ANCHOR = "anchor"
    TRANSIT = "transit"
    ACTION = "action"


class TaskStatus(str, Enum):
    """Task status enumeration."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    DEFERRED = "deferred"


class Priority(IntEnum):
    """Task priority (ordinal)."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class Task(BaseModel):
    """Canonical Task model with expected vs. actual performance."""

    id: Optional[str] = Field(None, description="Unique task identifier (UUID v4), assigned at creation")
    recurring_task_id: Optional[str] = Field(
        None, description="Recurring definition this task belongs to (null for standalone tasks)"
    )
    name: str = Field(..., max_length=200, description="Task name")
    task_type: TaskType = Field(..., description="Task type (fixed at creation)")
    task_category: TaskCategory = Field(TaskCategory.ACTION, description="Task category")
    is_commute: bool = Field(False, description="Whether the task represents transit time")
    status: TaskStatus = Field(TaskStatus.PENDING, description="Task status")
    priority: Priority = Field(Priority.MEDIUM, description="Priority (1=low .. 4=critical)")

    # Expected values (targets set at creation)
    expected_duration: Optional[int] = Field(None, description="Expected duration in minutes")
    expected_units: Optional[int] = Field(None, description="Expected number of units")

    # Actual values (observed on completion)
    actual_duration: Optional[int] = Field(None, description="Actual duration in minutes")
    actual_units: Optional[int] = Field(None, description="Actual number of units")

    # Metadata
    category: Optional[str] = Field(None, max_length=50, description="User-defined tag")
    notes: Optional[str] = Field(None, description="Free-form notes")
    deadline: Optional[datetime] = Field(None, description="Task deadline")

    created_at: Optional[datetime] = Field(None, description="Task creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Task last update timestamp")
    completed_at: Optional[datetime] = Field(None, description="Set once, when the task is completed")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
