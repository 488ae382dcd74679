# backend/app/schemas/booking.py
"""
Booking schemas for the trainer booking platform.

Request models cover the booking transitions (book, attendance, reschedule,
accolades). Response models expose the booking row and, for detail and list
views, nested customer, trainer and slot summaries.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, model_validator

from ..core.enums import AttendanceStatus, SlotType
from ..models.booking import Booking
from ..models.time_slot import TimeSlot
from ..models.user import User
from ._strict_base import StrictRequestModel
from .base import StandardizedModel
from .base_responses import PaginationMeta


class BookingCreate(StrictRequestModel):
    time_slot_id: str = Field(min_length=1)


class AttendanceUpdate(StrictRequestModel):
    """
    Attendance mark.

    Accepts either ``attended`` (bool) or ``bookingStatus``
    (``ATTENDED`` / ``NOT_ATTENDED``), not both.
    """

    attended: Optional[bool] = None
    booking_status: Optional[AttendanceStatus] = None

    @model_validator(mode="after")
    def validate_one_of(self) -> "AttendanceUpdate":
        if (self.attended is None) == (self.booking_status is None):
            raise ValueError("Provide exactly one of attended or bookingStatus")
        return self

    @property
    def resolved(self) -> bool:
        if self.attended is not None:
            return self.attended
        return self.booking_status == AttendanceStatus.ATTENDED


class RescheduleRequest(StrictRequestModel):
    new_time_slot_id: str = Field(min_length=1)


class AccoladesUpdate(StrictRequestModel):
    accolades: List[str]


class UserSummary(StandardizedModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str

    @classmethod
    def from_model(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id, first_name=user.first_name, last_name=user.last_name, email=user.email
        )


class TimeSlotSummary(StandardizedModel):
    id: str
    date: date
    start: str
    end: str
    slot_type: SlotType
    duration_minutes: int

    @classmethod
    def from_model(cls, slot: TimeSlot) -> "TimeSlotSummary":
        return cls(
            id=slot.id,
            date=slot.date,
            start=slot.start_hhmm,
            end=slot.end_hhmm,
            slot_type=slot.slot_type,
            duration_minutes=slot.duration_minutes,
        )


class BookingResponse(StandardizedModel):
    id: str
    customer_id: str
    trainer_id: str
    time_slot_id: str
    original_time_slot_id: str
    is_cancelled: bool
    is_attended_by_trainer: Optional[bool] = None
    rescheduled_count: int
    last_rescheduled_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    accolades: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    customer: Optional[UserSummary] = None
    trainer: Optional[UserSummary] = None
    time_slot: Optional[TimeSlotSummary] = None
    original_time_slot: Optional[TimeSlotSummary] = None

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingDetailResponse":
        base = BookingResponse.model_validate(booking).model_dump()
        return cls(
            **base,
            customer=UserSummary.from_model(booking.customer) if booking.customer else None,
            trainer=UserSummary.from_model(booking.trainer) if booking.trainer else None,
            time_slot=TimeSlotSummary.from_model(booking.time_slot) if booking.time_slot else None,
            original_time_slot=(
                TimeSlotSummary.from_model(booking.original_time_slot)
                if booking.original_time_slot
                else None
            ),
        )


class BookingPage(StandardizedModel):
    bookings: List[BookingDetailResponse]
    pagination: PaginationMeta
