"""Repository layer for task database operations."""

import logging
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import desc

from nudge.engine.identity import assign_identifier_if_absent
from nudge.engine.scoring import score
from nudge.engine.validation import TaskValidationError, apply_task_type_rules, validate_task
from nudge.models.task import Task, TaskStatus
from nudge.database.models import TaskDB, enum_to_value

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations.

    Every write runs the explicit pre-write contract: task-type rules, identifier
    assignment, then validation. Validation failures raise TaskValidationError before
    anything touches the session.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, task: Task) -> Task:
        """Create a new task."""
        task = task.model_copy()
        apply_task_type_rules(task)
        assign_identifier_if_absent(task)
        validate_task(task)

        now = datetime.utcnow()
        task.created_at = task.created_at or now
        task.updated_at = task.updated_at or now
        if task.status != TaskStatus.COMPLETED:
            task.completed_at = None
        elif task.completed_at is None:
            task.completed_at = now

        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.name[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def _get_db(self, task_id: str) -> Optional[TaskDB]:
        return self.db.query(TaskDB).filter(TaskDB.id == task_id).first()

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        task_db = self._get_db(task_id)
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks sorted by creation date (newest first)."""
        tasks_db = self.db.query(TaskDB).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def list_by_status(self, status: TaskStatus) -> List[Task]:
        """Get all tasks with the given status (newest first)."""
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.status == enum_to_value(status),
        ).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def list_for_recurring_task(self, recurring_task_id: str) -> List[Task]:
        """Get all tasks that reference a recurring definition."""
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.recurring_task_id == recurring_task_id,
        ).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def list_scored(self) -> List[Tuple[Task, Optional[float]]]:
        """Get completed tasks with their success percentage (most recently completed first)."""
        tasks = [
            task_db.to_pydantic()
            for task_db in self.db.query(TaskDB).filter(
                TaskDB.status == TaskStatus.COMPLETED.value,
            ).order_by(desc(TaskDB.completed_at)).all()
        ]
        return [(task, score(task)) for task in tasks]

    def update(self, task: Task) -> Task:
        """Update an existing task.

        The task type is fixed at creation. `completed_at` is stamped the first time the
        task reaches COMPLETED and is never overwritten afterwards.
        """
        task_db = self._get_db(task.id)
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        if enum_to_value(task.task_type) != task_db.task_type:
            raise TaskValidationError("task_type", "cannot be changed after creation")

        task = task.model_copy()
        apply_task_type_rules(task)
        validate_task(task)

        now = datetime.utcnow()
        status_value = enum_to_value(task.status)
        was_completed = task_db.status == TaskStatus.COMPLETED.value

        task_db.recurring_task_id = task.recurring_task_id
        task_db.name = task.name
        task_db.task_category = enum_to_value(task.task_category)
        task_db.is_commute = task.is_commute
        task_db.status = status_value
        task_db.priority = int(enum_to_value(task.priority))
        task_db.expected_duration = task.expected_duration
        task_db.expected_units = task.expected_units
        task_db.actual_duration = task.actual_duration
        task_db.actual_units = task.actual_units
        task_db.category = task.category
        task_db.notes = task.notes
        task_db.deadline = task.deadline
        task_db.updated_at = now
        if status_value == TaskStatus.COMPLETED.value and task_db.completed_at is None:
            # A value carried on a snapshot that was never completed is stale
            if was_completed:
                task_db.completed_at = task.completed_at or now
            else:
                task_db.completed_at = now

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.name[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def complete(
        self,
        task_id: str,
        actual_duration: Optional[int] = None,
        actual_units: Optional[int] = None,
    ) -> Task:
        """Mark a task completed and record its actual values."""
        task = self.get(task_id)
        if task is None:
            raise ValueError(f"Task {task_id} not found")

        task.status = TaskStatus.COMPLETED.value
        if actual_duration is not None:
            task.actual_duration = actual_duration
        if actual_units is not None:
            task.actual_units = actual_units
        return self.update(task)

    def delete(self, task_id: str) -> bool:
        """Permanently delete a task by ID."""
        task_db = self._get_db(task_id)
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise
