# backend/app/repositories/booking_repository.py
"""
Booking Repository for the trainer booking platform.

Implements data access for bookings:
- Booking creation (integrity errors surface for conflict handling)
- Detail lookups with customer, trainer and slot eager loading
- Paginated trainer listings, newest first
- Live-booking lookups by slot and the next upcoming session
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.time_slot import TimeSlot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        """Initialize with Booking model."""
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(
            joinedload(Booking.customer),
            joinedload(Booking.trainer),
            joinedload(Booking.time_slot),
        )

    def get_booking_with_details(self, booking_id: str) -> Optional[Booking]:
        """Booking with customer, trainer, current and original slot loaded."""
        try:
            return (
                self._apply_eager_loading(self.db.query(Booking))
                .options(joinedload(Booking.original_time_slot))
                .filter(Booking.id == booking_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting booking details {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to get booking: {str(e)}")

    def get_trainer_bookings(
        self, trainer_id: str, page: int, page_size: int
    ) -> tuple[List[Booking], int]:
        query = (
            self._apply_eager_loading(self.db.query(Booking))
            .filter(Booking.trainer_id == trainer_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        return self._paginate(query, page, page_size)

    def get_for_update(self, booking_id: str) -> Optional[Booking]:
        """Load a booking with a row lock for a state transition."""
        try:
            return (
                self.db.query(Booking)
                .filter(Booking.id == booking_id)
                .populate_existing()
                .with_for_update()
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error locking booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to get booking: {str(e)}")

    def get_next_upcoming(self, trainer_id: str, now: datetime) -> Optional[Booking]:
        """Earliest live booking whose slot starts at or after ``now``."""
        try:
            return (
                self.db.query(Booking)
                .join(TimeSlot, Booking.time_slot_id == TimeSlot.id)
                .options(joinedload(Booking.customer), joinedload(Booking.time_slot))
                .filter(
                    Booking.trainer_id == trainer_id,
                    Booking.is_cancelled.is_(False),
                    TimeSlot.start_time >= now,
                )
                .order_by(TimeSlot.start_time.asc(), Booking.id.asc())
                .first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting next session for {trainer_id}: {str(e)}")
            raise RepositoryException(f"Failed to get next session: {str(e)}")
