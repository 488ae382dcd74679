# backend/app/schemas/availability.py
"""
Availability schemas for the trainer booking platform.

Requests carry raw ``HH:MM`` ranges split into peak and alternative lists;
responses reshape a daily availability row, its week and its slots into a
single view.
"""

from datetime import date, datetime
import re
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from ..core.constants import DATE_PATTERN, TIME_PATTERN
from ._strict_base import StrictRequestModel
from .base import StandardizedModel

_DATE_RE = re.compile(DATE_PATTERN)


def _strict_iso_date(value: Any) -> Any:
    """Only plain ``YYYY-MM-DD`` strings are accepted for dates."""
    if isinstance(value, str) and not _DATE_RE.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    return value


class SlotRangeIn(StrictRequestModel):
    """A raw clock-time range for one slot."""

    start: str = Field(pattern=TIME_PATTERN, examples=["09:00"])
    end: str = Field(pattern=TIME_PATTERN, examples=["10:00"])

    @model_validator(mode="after")
    def validate_time_order(self) -> "SlotRangeIn":
        """Ensure end time is after start time."""
        if self.end <= self.start:
            raise ValueError("End time must be after start time")
        return self


class AvailabilityUpdate(StrictRequestModel):
    """Set availability for one date, or request leave with ``isAvailable=false``."""

    date: date
    is_available: bool = True
    peak_slots: List[SlotRangeIn] = Field(default_factory=list)
    alternative_slots: List[SlotRangeIn] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> Any:
        return _strict_iso_date(v)

    @model_validator(mode="after")
    def validate_slots(self) -> "AvailabilityUpdate":
        if self.is_available and not self.peak_slots:
            raise ValueError("At least one peak slot is required when available")
        return self


class SlotView(StandardizedModel):
    id: str
    start: str
    end: str
    is_booked: bool


class DailyAvailabilityView(StandardizedModel):
    """Daily availability with its week totals and slots grouped by type."""

    id: str
    trainer_id: str
    date: date
    day_of_week: str
    is_available: bool
    total_day_minutes: int
    required_minutes: int
    total_booked_minutes: int
    week_start_date: datetime
    week_end_date: datetime
    peak_slots: List[SlotView] = Field(default_factory=list)
    alternative_slots: List[SlotView] = Field(default_factory=list)


class LeaveEligibility(StandardizedModel):
    trainer_id: str
    date: date
    month: str = Field(description="Calendar month checked, YYYY-MM")
    leave_days_used: int
    leave_days_allowed: int
    can_apply_leave: bool
    message: Optional[str] = None
