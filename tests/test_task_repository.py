"""Tests for TaskRepository CRUD operations."""

import pytest
from datetime import datetime, timedelta
import uuid

from nudge.engine.validation import TaskValidationError
from nudge.models.task import Task, TaskType, TaskCategory, TaskStatus, Priority


class TestTaskRepository:
    """Test TaskRepository CRUD operations."""

    def test_create_task(self, task_repository, sample_task):
        """Test creating a task."""
        created = task_repository.create(sample_task)

        assert created.id == sample_task.id
        assert created.name == sample_task.name
        assert created.status == TaskStatus.PENDING
        assert created.priority == Priority.MEDIUM
        assert created.expected_duration == 60

    def test_create_assigns_identifier_when_absent(self, task_repository, sample_task_base):
        task = Task(**{**sample_task_base, "id": None})

        created = task_repository.create(task)

        assert created.id is not None
        assert uuid.UUID(created.id).version == 4
        assert task.id is None  # caller's snapshot is not mutated

    def test_create_rejects_unit_task_without_expected_units(self, task_repository, sample_task_base):
        task = Task(**{**sample_task_base, "task_type": TaskType.UNIT_BASED, "expected_units": None})

        with pytest.raises(TaskValidationError):
            task_repository.create(task)

        assert task_repository.get_all() == []

    def test_create_commute_forces_transit(self, task_repository, commute_task):
        commute_task.task_category = TaskCategory.ACTION
        commute_task.is_commute = False

        created = task_repository.create(commute_task)

        assert created.is_commute is True
        assert created.task_category == TaskCategory.TRANSIT

    def test_create_completed_task_stamps_completed_at(self, task_repository, sample_task_base):
        task = Task(**{**sample_task_base, "status": TaskStatus.COMPLETED, "actual_duration": 50})

        created = task_repository.create(task)

        assert created.completed_at is not None

    def test_get_task_by_id(self, task_repository, sample_task):
        """Test retrieving a task by ID."""
        created = task_repository.create(sample_task)
        retrieved = task_repository.get(created.id)

        assert retrieved is not None
        assert retrieved.id == created.id
        assert retrieved.name == created.name

    def test_get_nonexistent_task(self, task_repository):
        """Test retrieving a nonexistent task returns None."""
        assert task_repository.get("nonexistent-id") is None

    def test_get_all_sorted_by_creation_date(self, task_repository, sample_task_base):
        """Test that get_all() returns tasks sorted by creation date (newest first)."""
        now = datetime.utcnow()
        task1 = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "created_at": now, "name": "Task 1"})
        task2 = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "created_at": now - timedelta(minutes=1), "name": "Task 2"})
        task3 = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "created_at": now - timedelta(minutes=2), "name": "Task 3"})

        # Create in reverse order
        task_repository.create(task3)
        task_repository.create(task2)
        task_repository.create(task1)

        all_tasks = task_repository.get_all()
        assert [t.name for t in all_tasks] == ["Task 1", "Task 2", "Task 3"]

    def test_list_by_status(self, task_repository, sample_task_base):
        pending = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "name": "Pending"})
        deferred = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "name": "Deferred", "status": TaskStatus.DEFERRED})
        task_repository.create(pending)
        task_repository.create(deferred)

        result = task_repository.list_by_status(TaskStatus.DEFERRED)

        assert len(result) == 1
        assert result[0].name == "Deferred"

    def test_update_task(self, task_repository, sample_task):
        """Test updating a task."""
        created = task_repository.create(sample_task)

        created.name = "Updated Name"
        created.notes = "Updated Notes"
        created.priority = Priority.CRITICAL

        updated = task_repository.update(created)

        assert updated.name == "Updated Name"
        assert updated.notes == "Updated Notes"
        assert updated.priority == Priority.CRITICAL

    def test_update_nonexistent_task_raises_error(self, task_repository, sample_task):
        """Test updating a nonexistent task raises ValueError."""
        sample_task.id = "nonexistent-id"

        with pytest.raises(ValueError, match="Task.*not found"):
            task_repository.update(sample_task)

    def test_update_rejects_removing_expected_value(self, task_repository, sample_task):
        created = task_repository.create(sample_task)
        created.expected_duration = None

        with pytest.raises(TaskValidationError):
            task_repository.update(created)

        assert task_repository.get(created.id).expected_duration == 60

    def test_update_rejects_task_type_change(self, task_repository, sample_task):
        created = task_repository.create(sample_task)
        created.task_type = TaskType.UNIT_BASED
        created.expected_units = 3

        with pytest.raises(TaskValidationError, match="task_type"):
            task_repository.update(created)

    def test_completed_at_is_set_once(self, task_repository, sample_task):
        created = task_repository.create(sample_task)
        assert created.completed_at is None

        completed = task_repository.complete(created.id, actual_duration=45)
        first_completed_at = completed.completed_at
        assert first_completed_at is not None

        completed.notes = "Edited after completion"
        completed.completed_at = first_completed_at + timedelta(days=1)
        edited = task_repository.update(completed)

        assert edited.completed_at == first_completed_at

    def test_pending_task_drops_supplied_completed_at(self, task_repository, sample_task_base):
        stale = datetime.utcnow() - timedelta(days=30)
        task = Task(**{**sample_task_base, "completed_at": stale})

        created = task_repository.create(task)
        assert created.completed_at is None

        done = task_repository.complete(created.id, actual_duration=50)
        assert done.completed_at is not None
        assert done.completed_at > stale

    def test_update_to_completed_ignores_stale_completed_at(self, task_repository, sample_task):
        created = task_repository.create(sample_task)
        stale = datetime.utcnow() - timedelta(days=30)

        created.status = TaskStatus.COMPLETED
        created.actual_duration = 40
        created.completed_at = stale
        done = task_repository.update(created)

        assert done.completed_at > stale

    def test_complete_unit_task_scores(self, task_repository, unit_task):
        from nudge.engine.scoring import score

        created = task_repository.create(unit_task)
        completed = task_repository.complete(created.id, actual_units=1)

        assert completed.status == TaskStatus.COMPLETED
        assert completed.actual_units == 1
        assert score(completed) == pytest.approx(33.33, abs=0.01)

    def test_complete_nonexistent_task_raises_error(self, task_repository):
        with pytest.raises(ValueError, match="not found"):
            task_repository.complete("nonexistent-id", actual_duration=10)

    def test_list_scored_returns_completed_tasks_with_scores(self, task_repository, sample_task, commute_task):
        task_repository.create(sample_task)
        created_commute = task_repository.create(commute_task)
        task_repository.complete(created_commute.id, actual_duration=35)

        scored = task_repository.list_scored()

        assert len(scored) == 1
        task, success = scored[0]
        assert task.id == created_commute.id
        assert success == pytest.approx(85.71, abs=0.01)

    def test_delete_task(self, task_repository, sample_task):
        """Test deleting a task."""
        created = task_repository.create(sample_task)

        assert task_repository.delete(created.id) is True
        assert task_repository.get(created.id) is None

    def test_delete_nonexistent_task(self, task_repository):
        """Test deleting a nonexistent task returns False."""
        assert task_repository.delete("nonexistent-id") is False
