# backend/app/repositories/analytics_repository.py
"""
Analytics Repository: read-only aggregate queries over slots and bookings.

Every query is scoped to one trainer and a closed date or datetime range.
"""

from datetime import date, datetime
import logging
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.booking import Booking
from ..models.time_slot import TimeSlot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AnalyticsRepository(BaseRepository[Booking]):
    """Aggregate queries for trainer utilization reporting."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def count_booked_slots(self, trainer_id: str, start: date, end: date) -> int:
        """Slots currently booked whose date falls in [start, end]."""
        return int(
            self._execute_scalar(
                self.db.query(func.count(TimeSlot.id)).filter(
                    TimeSlot.trainer_id == trainer_id,
                    TimeSlot.is_booked.is_(True),
                    TimeSlot.date >= start,
                    TimeSlot.date <= end,
                )
            )
            or 0
        )

    def count_attended(self, trainer_id: str, start: datetime, end: datetime) -> int:
        """Bookings marked attended and created within [start, end]."""
        return int(
            self._execute_scalar(
                self.db.query(func.count(Booking.id)).filter(
                    Booking.trainer_id == trainer_id,
                    Booking.is_attended_by_trainer.is_(True),
                    Booking.created_at >= start,
                    Booking.created_at <= end,
                )
            )
            or 0
        )

    def sum_booked_minutes(self, trainer_id: str, start: date, end: date) -> int:
        return int(
            self._execute_scalar(
                self.db.query(func.coalesce(func.sum(TimeSlot.duration_minutes), 0)).filter(
                    TimeSlot.trainer_id == trainer_id,
                    TimeSlot.is_booked.is_(True),
                    TimeSlot.date >= start,
                    TimeSlot.date <= end,
                )
            )
            or 0
        )

    def live_session_dates(self, trainer_id: str, start: date, end: date) -> List[date]:
        """Slot date of every live booking in [start, end], one entry per booking."""
        rows = self._execute_query(
            self.db.query(TimeSlot.date)
            .join(Booking, Booking.time_slot_id == TimeSlot.id)
            .filter(
                Booking.trainer_id == trainer_id,
                Booking.is_cancelled.is_(False),
                TimeSlot.date >= start,
                TimeSlot.date <= end,
            )
        )
        return [row[0] for row in rows]

    def live_booking_slot_windows(self, trainer_id: str) -> List[Tuple[date, datetime, datetime]]:
        """(slot date, start, end) for every live booking of the trainer, ordered by date."""
        rows = self._execute_query(
            self.db.query(TimeSlot.date, TimeSlot.start_time, TimeSlot.end_time)
            .join(Booking, Booking.time_slot_id == TimeSlot.id)
            .filter(Booking.trainer_id == trainer_id, Booking.is_cancelled.is_(False))
            .order_by(TimeSlot.date.asc(), TimeSlot.start_time.asc())
        )
        return [(row[0], row[1], row[2]) for row in rows]
