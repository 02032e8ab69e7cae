"""Sample data for local development."""

import logging
from datetime import datetime, timedelta
from typing import List

from sqlalchemy.orm import Session

from nudge.config import Settings
from nudge.database.models import RecurringTaskDB, TaskDB
from nudge.database.recurring_task_repository import RecurringTaskRepository
from nudge.database.repository import TaskRepository
from nudge.engine.scoring import score
from nudge.models.recurrence import RecurringTask, RecurrenceType, Weekday
from nudge.models.task import Task, TaskType, TaskCategory, TaskStatus, Priority

logger = logging.getLogger(__name__)


def sample_recurring_tasks() -> List[RecurringTask]:
    """One recurring definition of each recurrence type."""
    return [
        RecurringTask(
            name="Daily Standup",
            recurrence_type=RecurrenceType.DAILY,
            recurrence_interval=1,
        ),
        RecurringTask(
            name="Team Meeting",
            recurrence_type=RecurrenceType.WEEKLY,
            recurrence_days=[Weekday.MONDAY, Weekday.WEDNESDAY],
        ),
        RecurringTask(
            name="Pay Rent",
            recurrence_type=RecurrenceType.MONTHLY_DATE,
            recurrence_day_of_month=1,
        ),
        RecurringTask(
            name="Board Meeting",
            recurrence_type=RecurrenceType.MONTHLY_PATTERN,
            recurrence_pattern="first_monday",
        ),
    ]


def sample_tasks(now: datetime) -> List[Task]:
    return [
        Task(
            name="Read 3 chapters for exam",
            task_type=TaskType.UNIT_BASED,
            task_category=TaskCategory.ACTION,
            priority=Priority.MEDIUM,
            expected_units=3,
            expected_duration=150,
        ),
        Task(
            name="Deep work session",
            task_type=TaskType.TIME_BASED,
            task_category=TaskCategory.ACTION,
            priority=Priority.HIGH,
            expected_duration=120,
        ),
        Task(
            name="Morning commute to office",
            task_type=TaskType.COMMUTE,
            status=TaskStatus.COMPLETED,
            priority=Priority.MEDIUM,
            expected_duration=30,
            actual_duration=35,
            completed_at=now - timedelta(hours=1),
        ),
        Task(
            name="Sleep",
            task_type=TaskType.TIME_BASED,
            task_category=TaskCategory.ANCHOR,
            status=TaskStatus.COMPLETED,
            priority=Priority.CRITICAL,
            expected_duration=480,  # 8 hours
            actual_duration=450,  # 7.5 hours
            completed_at=now - timedelta(hours=8),
        ),
        Task(
            name="Family dinner",
            task_type=TaskType.TIME_BASED,
            task_category=TaskCategory.ANCHOR,
            status=TaskStatus.COMPLETED,
            priority=Priority.CRITICAL,
            expected_duration=60,
            actual_duration=60,
            completed_at=now - timedelta(hours=2),
        ),
        Task(
            name="Review 3 PRs",
            task_type=TaskType.UNIT_BASED,
            task_category=TaskCategory.ACTION,
            status=TaskStatus.COMPLETED,
            priority=Priority.HIGH,
            expected_units=3,
            actual_units=3,
            expected_duration=60,
            actual_duration=75,
            completed_at=now - timedelta(hours=3),
            category="Work",
        ),
    ]


def seed(db: Session, settings: Settings) -> bool:
    """Populate the database with sample data.

    Only runs in development, and only into an empty database.

    Returns:
        True if sample data was inserted
    """
    if not settings.is_development:
        logger.info("Skipping seed - not in development mode")
        return False

    if db.query(TaskDB).first() is not None or db.query(RecurringTaskDB).first() is not None:
        logger.info("Skipping seed - database already has data")
        return False

    logger.info("Seeding database with sample data...")

    recurring_repo = RecurringTaskRepository(db)
    for recurring_task in sample_recurring_tasks():
        recurring_repo.create(recurring_task)

    task_repo = TaskRepository(db)
    for task in sample_tasks(datetime.utcnow()):
        created = task_repo.create(task)
        success = score(created)
        if success is not None:
            logger.info(f"Task '{created.name}' - Success: {success:.2f}%")

    logger.info("Database seeding completed successfully")
    return True


def clear_data(db: Session) -> None:
    """Remove all rows from the task tables (keeps schema)."""
    logger.warning("Clearing all data from database...")
    try:
        db.query(TaskDB).delete(synchronize_session=False)
        db.query(RecurringTaskDB).delete(synchronize_session=False)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to clear data: {type(e).__name__}: {str(e)}")
        raise
    logger.info("All data cleared")
