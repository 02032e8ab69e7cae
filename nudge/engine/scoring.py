"""Success scoring for Nudge.

Maps a completed task's expected and actual values to a success percentage. Three
policies apply, selected by task type:

- Unit-based: share of the expected units delivered, capped at 100%.
- Time-based (non-commute): expected / actual duration, capped at 150%, so finishing
  early earns a bonus.
- Commute (commute tasks, or time-based tasks flagged as commute): on time or early is
  exactly 100%, late is penalized proportionally (expected / actual).

This module is pure and deterministic: same task in, same score out, no I/O.
"""

import logging
from typing import Optional

from nudge.models.constants import (
    COMMUTE_ON_TIME_SUCCESS,
    TIME_BASED_MAX_SUCCESS,
    UNIT_BASED_MAX_SUCCESS,
)
from nudge.models.task import Task, TaskStatus, TaskType

logger = logging.getLogger(__name__)

POLICY_UNIT_BASED = "unit_based"
POLICY_TIME_BASED = "time_based"
POLICY_COMMUTE = "commute"


def scoring_policy(task: Task) -> Optional[str]:
    """Return the scoring policy that applies to a task's type.

    Args:
        task: Task to inspect

    Returns:
        One of the POLICY_* names, or None for an unknown type
    """
    if task.task_type == TaskType.UNIT_BASED:
        return POLICY_UNIT_BASED
    if task.task_type == TaskType.COMMUTE:
        return POLICY_COMMUTE
    if task.task_type == TaskType.TIME_BASED:
        return POLICY_COMMUTE if task.is_commute else POLICY_TIME_BASED
    return None


def score(task: Task) -> Optional[float]:
    """Compute the success percentage of a task.

    Args:
        task: Task snapshot (persisted or not)

    Returns:
        Success percentage, or None when scoring does not apply: the task is not
        completed, a value the policy needs is missing or negative, or the ratio
        would divide by zero.
    """
    if task.status != TaskStatus.COMPLETED:
        return None

    policy = scoring_policy(task)
    if policy == POLICY_UNIT_BASED:
        return _score_unit_based(task)
    if policy == POLICY_TIME_BASED:
        return _score_time_based(task)
    if policy == POLICY_COMMUTE:
        return _score_commute(task)
    return None


def _has_negative(task: Task, *fields: str) -> bool:
    negative = [name for name in fields if getattr(task, name) < 0]
    if negative:
        logger.warning(f"Task {task.id} has negative {', '.join(negative)}; success is undefined")
    return bool(negative)


def _score_unit_based(task: Task) -> Optional[float]:
    if task.expected_units is None or task.actual_units is None:
        return None
    if _has_negative(task, "expected_units", "actual_units"):
        return None
    if task.expected_units == 0:
        logger.warning(f"Task {task.id} has expected_units=0; success is undefined")
        return None
    success = (task.actual_units / task.expected_units) * 100
    return min(success, UNIT_BASED_MAX_SUCCESS)


def _score_time_based(task: Task) -> Optional[float]:
    if task.expected_duration is None or task.actual_duration is None:
        return None
    if _has_negative(task, "expected_duration", "actual_duration"):
        return None
    if task.actual_duration == 0:
        logger.warning(f"Task {task.id} has actual_duration=0; success is undefined")
        return None
    success = (task.expected_duration / task.actual_duration) * 100
    return min(success, TIME_BASED_MAX_SUCCESS)


def _score_commute(task: Task) -> Optional[float]:
    if task.expected_duration is None or task.actual_duration is None:
        return None
    if _has_negative(task, "expected_duration", "actual_duration"):
        return None
    if task.actual_duration <= task.expected_duration:
        return COMMUTE_ON_TIME_SUCCESS
    # actual > expected here, so the ratio is below 100 and never negative
    return (task.expected_duration / task.actual_duration) * 100
