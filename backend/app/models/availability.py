# backend/app/models/availability.py
"""
Availability models for the trainer booking platform.

WeeklyAvailability holds the per-trainer ISO-week totals; DailyAvailability
holds the per-date working flag and the minutes offered that day. Slots hang
off the daily row (see app.models.time_slot).

Classes:
    WeeklyAvailability: One row per (trainer, Monday-start week)
    DailyAvailability: One row per (trainer, calendar date)
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
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class WeeklyAvailability(Base):
    """
    Weekly totals for a trainer.

    ``total_booked_minutes`` is only ever changed through an SQL-side atomic
    increment and always equals the sum of ``total_day_minutes`` over the
    week's daily rows.
    """

    __tablename__ = "trainer_weekly_availability"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    trainer_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    week_start_date = Column(DateTime, nullable=False)
    week_end_date = Column(DateTime, nullable=False)
    required_minutes = Column(Integer, nullable=False, default=0)
    total_booked_minutes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    days = relationship(
        "DailyAvailability",
        back_populates="week",
        order_by="DailyAvailability.date",
    )

    __table_args__ = (
        UniqueConstraint(
            "trainer_id",
            "week_start_date",
            "week_end_date",
            name="uq_trainer_week",
        ),
        CheckConstraint("required_minutes >= 0", name="ck_week_required_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<WeeklyAvailability {self.trainer_id} {self.week_start_date:%Y-%m-%d}: "
            f"{self.total_booked_minutes}/{self.required_minutes}>"
        )


class DailyAvailability(Base):
    """Per-date availability. ``is_available=False`` marks a leave day with no slots."""

    __tablename__ = "trainer_daily_availability"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    trainer_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    week_id = Column(
        String(26),
        ForeignKey("trainer_weekly_availability.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False)
    day_of_week = Column(String(10), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    total_day_minutes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    week = relationship("WeeklyAvailability", back_populates="days")
    time_slots = relationship(
        "TimeSlot",
        back_populates="daily_availability",
        order_by="TimeSlot.start_time",
    )

    __table_args__ = (
        UniqueConstraint("trainer_id", "date", name="uq_trainer_daily_date"),
        Index("ix_daily_availability_trainer_leave", "trainer_id", "is_available", "date"),
        CheckConstraint("total_day_minutes >= 0", name="ck_daily_minutes_non_negative"),
    )

    def __repr__(self) -> str:
        state = "available" if self.is_available else "leave"
        return f"<DailyAvailability {self.trainer_id} {self.date} {state}>"
