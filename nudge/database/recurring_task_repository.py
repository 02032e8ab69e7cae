"""Repository for RecurringTask database operations."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from nudge.database.models import RecurringTaskDB, TaskDB, enum_to_value
from nudge.engine.identity import assign_identifier_if_absent
from nudge.engine.validation import validate_recurring_task
from nudge.models.recurrence import RecurringTask

logger = logging.getLogger(__name__)


class RecurringTaskRepository:
    """Repository for RecurringTask database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, recurring_task: RecurringTask) -> RecurringTask:
        """Create a recurring definition after validating its type parameter."""
        recurring_task = recurring_task.model_copy()
        assign_identifier_if_absent(recurring_task)
        validate_recurring_task(recurring_task)

        now = datetime.utcnow()
        recurring_task.created_at = recurring_task.created_at or now
        recurring_task.updated_at = recurring_task.updated_at or now

        row = RecurringTaskDB.from_pydantic(recurring_task)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created recurring task {row.id}: {row.name[:50]}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create recurring task: {type(e).__name__}: {str(e)}")
            raise

    def _get_db(self, recurring_task_id: str) -> Optional[RecurringTaskDB]:
        return (
            self.db.query(RecurringTaskDB)
            .filter(RecurringTaskDB.id == recurring_task_id)
            .first()
        )

    def get(self, recurring_task_id: str) -> Optional[RecurringTask]:
        """Get a recurring definition by ID."""
        row = self._get_db(recurring_task_id)
        return row.to_pydantic() if row else None

    def list_active(self) -> List[RecurringTask]:
        """Get active definitions (newest first)."""
        rows = (
            self.db.query(RecurringTaskDB)
            .filter(RecurringTaskDB.is_active.is_(True))
            .order_by(RecurringTaskDB.created_at.desc())
            .all()
        )
        return [row.to_pydantic() for row in rows]

    def update(self, recurring_task: RecurringTask) -> RecurringTask:
        """Update an existing recurring definition."""
        row = self._get_db(recurring_task.id)
        if row is None:
            raise ValueError(f"Recurring task {recurring_task.id} not found")
        validate_recurring_task(recurring_task)

        row.name = recurring_task.name
        row.recurrence_type = enum_to_value(recurring_task.recurrence_type)
        row.recurrence_interval = recurring_task.recurrence_interval
        row.recurrence_days = recurring_task.recurrence_days
        row.recurrence_day_of_month = recurring_task.recurrence_day_of_month
        row.recurrence_pattern = recurring_task.recurrence_pattern
        row.recurrence_end_date = recurring_task.recurrence_end_date
        row.is_active = recurring_task.is_active
        row.updated_at = datetime.utcnow()
        try:
            self.db.commit()
            self.db.refresh(row)
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update recurring task {recurring_task.id}: {type(e).__name__}: {str(e)}")
            raise

    def deactivate(self, recurring_task_id: str) -> bool:
        """Mark a definition inactive, keeping it and its tasks."""
        row = self._get_db(recurring_task_id)
        if row is None:
            return False
        if not row.is_active:
            return True
        row.is_active = False
        row.updated_at = datetime.utcnow()
        try:
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to deactivate recurring task {recurring_task_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, recurring_task_id: str) -> bool:
        """Delete a definition and every task that references it."""
        row = self._get_db(recurring_task_id)
        if row is None:
            return False
        task_count = (
            self.db.query(TaskDB).filter(TaskDB.recurring_task_id == recurring_task_id).count()
        )
        try:
            self.db.delete(row)
            self.db.commit()
            logger.debug(f"Deleted recurring task {recurring_task_id} and {task_count} task(s)")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete recurring task {recurring_task_id}: {type(e).__name__}: {str(e)}")
            raise
