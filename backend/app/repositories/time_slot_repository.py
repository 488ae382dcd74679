# backend/app/repositories/time_slot_repository.py
"""
TimeSlot Repository: data access for the slot ledger.

Handles:
- Paginated slot listing per trainer/date and for the admin schedule
- Bulk creation and replacement of a day's generated slots
- Conditional booked/free transitions that make slot exclusivity atomic
"""

from datetime import date
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.time_slot import TimeSlot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TimeSlotRepository(BaseRepository[TimeSlot]):
    """Repository for trainer time slots."""

    def __init__(self, db: Session):
        super().__init__(db, TimeSlot)
        self.logger = logging.getLogger(__name__)

    # Listing

    def get_trainer_slots_for_date(
        self, trainer_id: str, day: date, page: int, page_size: int
    ) -> tuple[List[TimeSlot], int]:
        query = (
            self.db.query(TimeSlot)
            .filter(
                TimeSlot.trainer_id == trainer_id,
                TimeSlot.date == day,
                TimeSlot.is_retired.is_(False),
            )
            .order_by(TimeSlot.start_time.asc(), TimeSlot.id.asc())
        )
        return self._paginate(query, page, page_size)

    def list_slots(
        self,
        page: int,
        page_size: int,
        day: Optional[date] = None,
        created_by: Optional[str] = None,
        trainer_id: Optional[str] = None,
    ) -> tuple[List[TimeSlot], int]:
        """Admin listing with optional date, creator and trainer filters."""
        query = self.db.query(TimeSlot)
        if day is not None:
            query = query.filter(TimeSlot.date == day)
        if created_by is not None:
            query = query.filter(TimeSlot.created_by == created_by)
        if trainer_id is not None:
            query = query.filter(TimeSlot.trainer_id == trainer_id)
        query = query.order_by(TimeSlot.start_time.asc(), TimeSlot.id.asc())
        return self._paginate(query, page, page_size)

    def get_for_daily(self, daily_availability_id: str) -> List[TimeSlot]:
        return self._execute_query(
            self.db.query(TimeSlot)
            .filter(TimeSlot.daily_availability_id == daily_availability_id)
            .order_by(TimeSlot.start_time.asc())
        )

    def locked_ids_for_daily(self, daily_availability_id: str) -> List[str]:
        """Ids of the day's slots that hold a live booking and must not be deleted."""
        rows = self._execute_query(
            self.db.query(TimeSlot.id)
            .filter(
                TimeSlot.daily_availability_id == daily_availability_id,
                TimeSlot.is_booked.is_(True),
            )
            .order_by(TimeSlot.start_time.asc())
        )
        return [row[0] for row in rows]

    def detach_referenced_for_daily(self, daily_availability_id: str) -> int:
        """
        Unlink and retire the day's slots that booking history still points at.

        Cancelled and rescheduled-away bookings keep their slot ids, so those
        slots survive as standalone rows instead of being deleted.
        """
        referenced = (
            self.db.query(Booking.id)
            .filter(
                or_(
                    Booking.time_slot_id == TimeSlot.id,
                    Booking.original_time_slot_id == TimeSlot.id,
                )
            )
            .exists()
        )
        rows = self._execute_query(
            self.db.query(TimeSlot.id).filter(
                TimeSlot.daily_availability_id == daily_availability_id, referenced
            )
        )
        slot_ids = [row[0] for row in rows]
        if not slot_ids:
            return 0
        try:
            return (
                self.db.query(TimeSlot)
                .filter(TimeSlot.id.in_(slot_ids))
                .update(
                    {TimeSlot.daily_availability_id: None, TimeSlot.is_retired: True},
                    synchronize_session="fetch",
                )
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error detaching slots for {daily_availability_id}: {str(e)}")
            raise RepositoryException(f"Failed to detach time slots: {str(e)}")

    # Writes

    def bulk_create(self, slots: Sequence[Dict[str, Any]]) -> List[TimeSlot]:
        """Insert slot rows and flush so their ids are available."""
        try:
            entities = [TimeSlot(**data) for data in slots]
            self.db.add_all(entities)
            self.db.flush()
            return entities
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating slots: {str(e)}")
            raise RepositoryException(f"Failed to create time slots: {str(e)}")

    def delete_for_daily(self, daily_availability_id: str) -> int:
        """Delete every slot owned by a daily availability row."""
        try:
            return (
                self.db.query(TimeSlot)
                .filter(TimeSlot.daily_availability_id == daily_availability_id)
                .delete(synchronize_session="fetch")
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting slots for {daily_availability_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete time slots: {str(e)}")

    def mark_booked(self, slot_id: str) -> bool:
        """
        Flip ``is_booked`` false -> true in one statement.

        Returns:
            True if this caller claimed the slot, False if it was already booked,
            retired or missing
        """
        return self._set_booked(slot_id, expected=False, value=True)

    def mark_free(self, slot_id: str) -> bool:
        """Flip ``is_booked`` true -> false; False if the slot was not booked."""
        return self._set_booked(slot_id, expected=True, value=False)

    def _set_booked(self, slot_id: str, expected: bool, value: bool) -> bool:
        query = self.db.query(TimeSlot).filter(
            TimeSlot.id == slot_id, TimeSlot.is_booked.is_(expected)
        )
        if value:
            query = query.filter(TimeSlot.is_retired.is_(False))
        try:
            updated = query.update({TimeSlot.is_booked: value}, synchronize_session="fetch")
            return updated == 1
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating slot {slot_id} booked state: {str(e)}")
            raise RepositoryException(f"Failed to update time slot: {str(e)}")
