"""Tests for development seed data."""

import logging

import pytest

from nudge.config import Settings
from nudge.database.seed import seed, clear_data
from nudge.models.task import TaskStatus


def test_seed_skipped_outside_development(db_session, task_repository):
    assert seed(db_session, Settings(env="production")) is False
    assert task_repository.get_all() == []


def test_seed_inserts_sample_data(db_session, task_repository, recurring_task_repository):
    assert seed(db_session, Settings(env="development")) is True

    assert len(recurring_task_repository.list_active()) == 4
    assert len(task_repository.get_all()) == 6
    assert len(task_repository.list_by_status(TaskStatus.COMPLETED)) == 4


def test_seed_scores_completed_tasks(db_session, task_repository, caplog):
    with caplog.at_level(logging.INFO, logger="nudge.database.seed"):
        seed(db_session, Settings(env="development"))

    scores = {task.name: success for task, success in task_repository.list_scored()}
    assert scores["Morning commute to office"] == pytest.approx(85.71, abs=0.01)
    assert scores["Sleep"] == pytest.approx(106.67, abs=0.01)
    assert scores["Family dinner"] == 100.0
    assert scores["Review 3 PRs"] == 100.0
    assert "Task 'Sleep' - Success: 106.67%" in caplog.text


def test_seed_is_skipped_when_data_exists(db_session, task_repository):
    seed(db_session, Settings(env="development"))

    assert seed(db_session, Settings(env="development")) is False
    assert len(task_repository.get_all()) == 6


def test_clear_data(db_session, task_repository, recurring_task_repository):
    seed(db_session, Settings(env="development"))

    clear_data(db_session)

    assert task_repository.get_all() == []
    assert recurring_task_repository.list_active() == []
