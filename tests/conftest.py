"""Pytest fixtures and configuration for Nudge tests."""

import pytest
from datetime import datetime
from sqlalchemy.orm import Session
import uuid

from nudge.config import Settings
from nudge.database.database import Base, build_engine, create_session_factory
from nudge.database import models  # noqa: F401
from nudge.database.repository import TaskRepository
from nudge.database.recurring_task_repository import RecurringTaskRepository
from nudge.models.task import Task, TaskType, TaskCategory, TaskStatus, Priority
from nudge.models.recurrence import RecurringTask, RecurrenceType


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def test_settings():
    """Settings pointing at an in-memory database."""
    return Settings(db_url=TEST_DATABASE_URL, env="test")


@pytest.fixture(scope="function")
def db_engine(test_settings):
    """Create a fresh in-memory engine with all tables."""
    engine = build_engine(test_settings)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for testing.

    Uses an in-memory SQLite database (foreign keys on) that is created fresh for each test.
    """
    session = create_session_factory(db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def recurring_task_repository(db_session: Session):
    """Create a RecurringTaskRepository instance for testing."""
    return RecurringTaskRepository(db_session)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": str(uuid.uuid4()),
        "recurring_task_id": None,
        "name": "Test Task",
        "task_type": TaskType.TIME_BASED,
        "task_category": TaskCategory.ACTION,
        "is_commute": False,
        "status": TaskStatus.PENDING,
        "priority": Priority.MEDIUM,
        "expected_duration": 60,
        "expected_units": None,
        "actual_duration": None,
        "actual_units": None,
        "category": None,
        "notes": "Test notes",
        "deadline": None,
        "created_at": now,
        "updated_at": now,
        "completed_at": None,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample (pending, time-based) Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def unit_task(sample_task_base):
    """Create a pending unit-based task expecting 3 units."""
    return Task(**{**sample_task_base, "id": str(uuid.uuid4()), "task_type": TaskType.UNIT_BASED, "expected_duration": None, "expected_units": 3})


@pytest.fixture
def commute_task(sample_task_base):
    """Create a pending commute task expecting 30 minutes."""
    return Task(**{**sample_task_base, "id": str(uuid.uuid4()), "task_type": TaskType.COMMUTE, "expected_duration": 30})


@pytest.fixture
def daily_recurring_task():
    """Create a daily recurring definition."""
    return RecurringTask(name="Daily Standup", recurrence_type=RecurrenceType.DAILY, recurrence_interval=1)
