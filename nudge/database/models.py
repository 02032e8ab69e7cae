"""SQLAlchemy database models for Nudge."""

from datetime import datetime
from typing import Optional, Union, TypeVar, Type
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from nudge.database.database import Base
from nudge.engine.identity import new_identifier
from nudge.models.task import TaskType, TaskCategory, TaskStatus, Priority
from nudge.models.recurrence import RecurrenceType

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, int, T]) -> Union[str, int]:
    """Convert enum to its stored value (handles both enum and raw values).

    Args:
        enum_obj: Enum instance or raw value

    Returns:
        Value of the enum, or the raw value itself
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return enum_obj


def value_to_enum(value: Union[str, int, None], enum_class: Type[T], default: Optional[T]) -> Optional[T]:
    """Convert a stored value to enum with fallback to default.

    Args:
        value: Stored value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if value is None or value == "":
        return default
    try:
        if isinstance(value, str):
            return enum_class(value.lower())
        return enum_class(value)
    except (ValueError, AttributeError):
        return default


class RecurringTaskDB(Base):
    """Database model for a recurring task definition (recurrence configuration only)."""

    __tablename__ = "recurring_tasks"

    id = Column(String(36), primary_key=True, default=new_identifier)
    name = Column(String(200), nullable=False)

    # Recurrence configuration
    recurrence_type = Column(String(50), nullable=False)
    recurrence_interval = Column(Integer, nullable=True, default=1)  # DAILY: every N days
    recurrence_days = Column(JSON, nullable=True)  # WEEKLY: [0-6], 0 = Sunday
    recurrence_day_of_month = Column(Integer, nullable=True)  # MONTHLY_DATE: 1-31
    recurrence_pattern = Column(String(50), nullable=True)  # MONTHLY_PATTERN: "first_monday"
    recurrence_end_date = Column(DateTime, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Deleting a definition deletes its tasks (ORM cascade + ON DELETE CASCADE in the schema).
    tasks = relationship("TaskDB", back_populates="recurring_task", cascade="all, delete-orphan")

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from nudge.models.recurrence import RecurringTask

        return RecurringTask(
            id=self.id,
            name=self.name,
            recurrence_type=value_to_enum(self.recurrence_type, RecurrenceType, RecurrenceType.DAILY),
            recurrence_interval=self.recurrence_interval,
            recurrence_days=self.recurrence_days,
            recurrence_day_of_month=self.recurrence_day_of_month,
            recurrence_pattern=self.recurrence_pattern,
            recurrence_end_date=self.recurrence_end_date,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, recurring_task):
        """Create database model from Pydantic model."""
        return cls(
            id=recurring_task.id,
            name=recurring_task.name,
            recurrence_type=enum_to_value(recurring_task.recurrence_type),
            recurrence_interval=recurring_task.recurrence_interval,
            recurrence_days=recurring_task.recurrence_days,
            recurrence_day_of_month=recurring_task.recurrence_day_of_month,
            recurrence_pattern=recurring_task.recurrence_pattern,
            recurrence_end_date=recurring_task.recurrence_end_date,
            is_active=recurring_task.is_active,
            created_at=recurring_task.created_at,
            updated_at=recurring_task.updated_at,
        )


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(String(36), primary_key=True, default=new_identifier)

    # NULL for standalone tasks
    recurring_task_id = Column(
        String(36), ForeignKey("recurring_tasks.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Basic fields
    name = Column(String(200), nullable=False)
    task_type = Column(String(50), nullable=False)
    task_category = Column(String(50), nullable=False, default=TaskCategory.ACTION.value)
    is_commute = Column(Boolean, nullable=False, default=False)

    # Status and priority
    status = Column(String(50), nullable=False, default=TaskStatus.PENDING.value, index=True)
    priority = Column(Integer, nullable=False, default=Priority.MEDIUM.value)

    # Expected values
    expected_duration = Column(Integer, nullable=True)  # minutes (1-1440)
    expected_units = Column(Integer, nullable=True)  # quantity (1-1000)

    # Actual values
    actual_duration = Column(Integer, nullable=True)  # minutes (1-1440)
    actual_units = Column(Integer, nullable=True)  # quantity (>= 0)

    # Metadata
    category = Column(String(50), nullable=True)  # user-defined tag
    notes = Column(Text, nullable=True)
    deadline = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True, index=True)

    recurring_task = relationship("RecurringTaskDB", back_populates="tasks")

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from nudge.models.task import Task

        return Task(
            id=self.id,
            recurring_task_id=self.recurring_task_id,
            name=self.name,
            task_type=TaskType(self.task_type),
            task_category=value_to_enum(self.task_category, TaskCategory, TaskCategory.ACTION),
            is_commute=self.is_commute,
            status=value_to_enum(self.status, TaskStatus, TaskStatus.PENDING),
            priority=value_to_enum(self.priority, Priority, Priority.MEDIUM),
            expected_duration=self.expected_duration,
            expected_units=self.expected_units,
            actual_duration=self.actual_duration,
            actual_units=self.actual_units,
            category=self.category,
            notes=self.notes,
            deadline=self.deadline,
            created_at=self.created_at,
            updated_at=self.updated_at,
            completed_at=self.completed_at,
        )

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        # Handle enum values (Pydantic with use_enum_values=True returns raw values)
        return cls(
            id=task.id,
            recurring_task_id=task.recurring_task_id,
            name=task.name,
            task_type=enum_to_value(task.task_type),
            task_category=enum_to_value(task.task_category),
            is_commute=task.is_commute,
            status=enum_to_value(task.status),
            priority=int(enum_to_value(task.priority)),
            expected_duration=task.expected_duration,
            expected_units=task.expected_units,
            actual_duration=task.actual_duration,
            actual_units=task.actual_units,
            category=task.category,
            notes=task.notes,
            deadline=task.deadline,
            created_at=task.created_at,
            updated_at=task.updated_at,
            completed_at=task.completed_at,
        )
