# backend/app/models/time_slot.py
"""
TimeSlot model: the slot ledger.

A slot is a fixed start/end window on a date that at most one live booking
may hold. ``is_booked`` is written only by BookingService, through the
conditional updates in TimeSlotRepository.
"""

import logging

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.enums import SlotType
from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class TimeSlot(Base):
    """
    Bookable window for a trainer.

    Slots created through availability carry ``daily_availability_id``;
    slots created by the admin scheduling flow carry ``created_by`` instead.
    A slot dropped from its day while past bookings still point at it is
    unlinked and marked ``is_retired``; it stays readable but is no longer
    offered for booking.
    """

    __tablename__ = "trainer_time_slots"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    daily_availability_id = Column(
        String(26),
        ForeignKey("trainer_daily_availability.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    trainer_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_by = Column(String(26), ForeignKey("users.id"), nullable=True, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    slot_type = Column(String(20), nullable=False, default=SlotType.PEAK.value)
    duration_minutes = Column(Integer, nullable=False)
    is_booked = Column(Boolean, nullable=False, default=False)
    is_retired = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    daily_availability = relationship("DailyAvailability", back_populates="time_slots")
    trainer = relationship("User", foreign_keys=[trainer_id])

    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_slot_duration_positive"),
        CheckConstraint("end_time > start_time", name="ck_slot_time_order"),
        CheckConstraint("slot_type IN ('PEAK', 'ALTERNATIVE')", name="ck_slot_type"),
        Index("ix_time_slots_trainer_date_start", "trainer_id", "date", "start_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeSlot {self.id}: trainer={self.trainer_id} "
            f"{self.start_time:%Y-%m-%d %H:%M}-{self.end_time:%H:%M} "
            f"{self.slot_type} booked={self.is_booked}>"
        )

    @property
    def start_hhmm(self) -> str:
        return self.start_time.strftime("%H:%M")

    @property
    def end_hhmm(self) -> str:
        return self.end_time.strftime("%H:%M")
