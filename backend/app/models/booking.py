# backend/app/models/booking.py
"""
Booking model for the trainer booking platform.

A booking holds exactly one slot at a time. ``time_slot_id`` moves only on
reschedule; ``original_time_slot_id`` records the first slot ever booked and
is never rewritten. While ``is_cancelled`` is false the current slot is
flagged ``is_booked`` and no other live booking may reference it.
"""

from datetime import datetime
import logging
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class Booking(Base):
    """
    Customer booking of a trainer time slot.

    Lifecycle: ACTIVE (``is_cancelled`` false) -> CANCELLED (terminal).
    ``is_attended_by_trainer`` is an orthogonal tri-state flag settable only
    while ACTIVE.
    """

    __tablename__ = "trainer_bookings"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)

    customer_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    trainer_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    time_slot_id = Column(String(26), ForeignKey("trainer_time_slots.id"), nullable=False)
    original_time_slot_id = Column(String(26), ForeignKey("trainer_time_slots.id"), nullable=False)

    is_cancelled = Column(Boolean, nullable=False, default=False)
    is_attended_by_trainer = Column(Boolean, nullable=True)
    rescheduled_count = Column(Integer, nullable=False, default=0)
    last_rescheduled_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    accolades = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    customer = relationship("User", foreign_keys=[customer_id])
    trainer = relationship("User", foreign_keys=[trainer_id])
    time_slot = relationship("TimeSlot", foreign_keys=[time_slot_id])
    original_time_slot = relationship("TimeSlot", foreign_keys=[original_time_slot_id])

    __table_args__ = (
        CheckConstraint("rescheduled_count >= 0", name="ck_booking_reschedule_count"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if self.original_time_slot_id is None:
            self.original_time_slot_id = self.time_slot_id
        if self.accolades is None:
            self.accolades = []
        if self.rescheduled_count is None:
            self.rescheduled_count = 0
        if self.is_cancelled is None:
            self.is_cancelled = False

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: customer={self.customer_id}, trainer={self.trainer_id}, "
            f"slot={self.time_slot_id}, cancelled={self.is_cancelled}>"
        )

    @property
    def is_active(self) -> bool:
        return not self.is_cancelled

    def cancel(self, when: datetime) -> None:
        """Mark this booking cancelled. Freeing the slot is the service's job."""
        self.is_cancelled = True
        self.cancelled_at = when
        self.updated_at = when
        logger.info(f"Booking {self.id} cancelled")

    def move_to(self, new_time_slot_id: str, when: datetime) -> None:
        """Point the booking at a new slot, keeping the lineage intact."""
        if not self.original_time_slot_id:
            self.original_time_slot_id = self.time_slot_id
        self.time_slot_id = new_time_slot_id
        self.rescheduled_count = (self.rescheduled_count or 0) + 1
        self.last_rescheduled_at = when
        self.updated_at = when
        logger.info(f"Booking {self.id} rescheduled to slot {new_time_slot_id}")

    def set_attendance(self, attended: Optional[bool], when: datetime) -> None:
        self.is_attended_by_trainer = attended
        self.updated_at = when


# At most one live booking per slot
Index(
    "uq_bookings_live_slot",
    Booking.time_slot_id,
    unique=True,
    postgresql_where=Booking.is_cancelled.is_(False),
    sqlite_where=Booking.is_cancelled.is_(False),
)

Index("ix_bookings_trainer_created", Booking.trainer_id, Booking.created_at)
