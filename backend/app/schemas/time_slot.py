# backend/app/schemas/time_slot.py
"""Slot ledger schemas: slot views, pages and the admin create request."""

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from ..core.constants import TIME_PATTERN
from ..core.enums import SlotType
from ..models.time_slot import TimeSlot
from ._strict_base import StrictRequestModel
from .availability import _strict_iso_date
from .base import StandardizedModel
from .base_responses import PaginationMeta


class TimeSlotResponse(StandardizedModel):
    id: str
    trainer_id: str
    daily_availability_id: Optional[str] = None
    created_by: Optional[str] = None
    date: date
    start_time: datetime
    end_time: datetime
    start: str
    end: str
    slot_type: SlotType
    duration_minutes: int
    is_booked: bool

    @classmethod
    def from_model(cls, slot: TimeSlot) -> "TimeSlotResponse":
        return cls(
            id=slot.id,
            trainer_id=slot.trainer_id,
            daily_availability_id=slot.daily_availability_id,
            created_by=slot.created_by,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            start=slot.start_hhmm,
            end=slot.end_hhmm,
            slot_type=slot.slot_type,
            duration_minutes=slot.duration_minutes,
            is_booked=slot.is_booked,
        )


class TimeSlotPage(StandardizedModel):
    slots: List[TimeSlotResponse]
    pagination: PaginationMeta


class TimeSlotCreate(StrictRequestModel):
    """Admin scheduling request for a slot outside any availability day."""

    trainer_id: str = Field(min_length=1)
    date: date
    start: str = Field(pattern=TIME_PATTERN)
    end: str = Field(pattern=TIME_PATTERN)
    slot_type: SlotType = SlotType.PEAK

    @field_validator("date", mode="before")
    @classmethod
    def validate_date_format(cls, v: Any) -> Any:
        return _strict_iso_date(v)

    @model_validator(mode="after")
    def validate_time_order(self) -> "TimeSlotCreate":
        if self.end <= self.start:
            raise ValueError("End time must be after start time")
        return self
