"""Recurring task definitions for Nudge.

A recurring definition only holds recurrence configuration. Nothing in Nudge
materializes task instances from it yet; tasks merely reference it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY_DATE = "monthly_date"
    MONTHLY_PATTERN = "monthly_pattern"


class Weekday(int, Enum):
    """Day numbers used by weekly recurrence (0 = Sunday)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class RecurringTask(BaseModel):
    """Recurrence configuration that tasks may reference.

    Notes:
    - `recurrence_interval` applies to DAILY (every N days).
    - `recurrence_days` applies to WEEKLY (day numbers, 0 = Sunday).
    - `recurrence_day_of_month` applies to MONTHLY_DATE (1-31).
    - `recurrence_pattern` applies to MONTHLY_PATTERN (e.g. "first_monday").
    """

    id: Optional[str] = None
    name: str = Field(..., max_length=200)
    recurrence_type: RecurrenceType

    recurrence_interval: Optional[int] = Field(1, ge=1, description="Every N days")
    recurrence_days: Optional[List[int]] = Field(None, description="Weekdays on which it occurs")
    recurrence_day_of_month: Optional[int] = Field(None, ge=1, le=31)
    recurrence_pattern: Optional[str] = Field(None, max_length=50)
    recurrence_end_date: Optional[datetime] = None

    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        use_enum_values = True

    @field_validator("recurrence_days", mode="before")
    @classmethod
    def _validate_recurrence_days(cls, v):
        if v is None:
            return None
        # Deduplicate but preserve order
        seen = set()
        out: List[int] = []
        for day in v:
            day = int(day)
            if day < 0 or day > 6:
                raise ValueError("recurrence_days entries must be between 0 (Sunday) and 6 (Saturday)")
            if day not in seen:
                seen.add(day)
                out.append(day)
        return out

    @field_validator("recurrence_pattern")
    @classmethod
    def _normalize_pattern(cls, v):
        if v is None:
            return None
        return v.strip().lower()
