"""Constants for Nudge.

This module centralizes scoring caps, value bounds and default values used throughout the application.
"""

from nudge.models.task import Priority, TaskCategory, TaskStatus


# Task defaults
DEFAULT_TASK_CATEGORY = TaskCategory.ACTION
DEFAULT_TASK_STATUS = TaskStatus.PENDING
DEFAULT_PRIORITY = Priority.MEDIUM

# Success scoring
UNIT_BASED_MAX_SUCCESS = 100.0  # no credit beyond the target
TIME_BASED_MAX_SUCCESS = 150.0  # finishing early is rewarded up to 1.5x
COMMUTE_ON_TIME_SUCCESS = 100.0

# Value bounds
MIN_DURATION_MIN = 1
MAX_DURATION_MIN = 1440  # one day
MIN_EXPECTED_UNITS = 1
MAX_EXPECTED_UNITS = 1000
MIN_ACTUAL_UNITS = 0

# Monthly pattern vocabulary ("first_monday", "last_friday", ...)
PATTERN_ORDINALS = ("first", "second", "third", "fourth", "last")
PATTERN_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
