# backend/app/services/booking_service.py
"""
Booking Service for the trainer booking platform.

Handles the booking state machine against the slot ledger:
- Book a free slot
- Mark attendance
- Cancel (frees the slot)
- Reschedule (frees the old slot, claims the new one, keeps lineage)
- Replace accolades
- Booking details and per-trainer listings

Every transition that touches ``TimeSlot.is_booked`` runs in one transaction
together with the booking write. Slots are claimed with a conditional UPDATE
(``... WHERE is_booked = false``), so two concurrent callers cannot both win;
the partial unique index on live bookings per slot backs this up.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..core.config import settings
from ..core.exceptions import (
    AlreadyCancelledException,
    BookingNotFoundException,
    NoOpRescheduleException,
    ServiceException,
    SlotAlreadyBookedException,
    SlotNotFoundException,
    TrainerMismatchException,
)
from ..models.booking import Booking
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .slot_ledger import validate_page

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(getattr(exc, "orig", exc)).lower()
    return "unique" in message or "duplicate key" in message


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Bookings are ACTIVE until cancelled; CANCELLED is terminal. Attendance is
    a separate tri-state flag that can only change while ACTIVE.
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        """
        Initialize booking service.

        Args:
            db: Database session
            clock: Source of "now" for created/rescheduled/cancelled stamps
        """
        super().__init__(db, clock=clock)
        self.repository = RepositoryFactory.create_booking_repository(db)
        self.time_slot_repository = RepositoryFactory.create_time_slot_repository(db)

    @BaseService.measure_operation("book_slot")
    def book(self, customer_id: str, trainer_id: str, time_slot_id: str) -> Booking:
        """
        Book a free slot for a customer.

        Raises:
            SlotNotFoundException: slot does not exist or is retired
            TrainerMismatchException: slot belongs to another trainer
            SlotAlreadyBookedException: slot is held by a live booking
        """
        self.log_operation(
            "book_slot", customer_id=customer_id, trainer_id=trainer_id, time_slot_id=time_slot_id
        )
        with self.transaction():
            slot = self.time_slot_repository.get_by_id(time_slot_id, load_relationships=False)
            if slot is None or slot.is_retired:
                raise SlotNotFoundException(time_slot_id)
            if slot.trainer_id != trainer_id:
                raise TrainerMismatchException(time_slot_id, trainer_id)
            if slot.is_booked:
                raise SlotAlreadyBookedException(time_slot_id)

            self._claim_slot(time_slot_id, transition="book")
            booking = self._create_booking(customer_id, trainer_id, time_slot_id)

        prometheus_metrics.record_booking_transition("book")
        self.logger.info(f"Booking {booking.id} created on slot {time_slot_id}")
        return booking

    @BaseService.measure_operation("mark_attended")
    def mark_attended(self, booking_id: str, attended: bool) -> Booking:
        """
        Set whether the trainer saw the customer. Safe to repeat.

        Raises:
            BookingNotFoundException: booking does not exist
            AlreadyCancelledException: booking is cancelled
        """
        with self.transaction():
            booking = self._get_for_update(booking_id)
            if booking.is_cancelled:
                raise AlreadyCancelledException(booking_id)
            if booking.is_attended_by_trainer is not attended:
                booking.set_attendance(attended, self.now())
                self.repository.flush()

        prometheus_metrics.record_booking_transition("attend")
        return booking

    @BaseService.measure_operation("cancel_booking")
    def cancel(self, booking_id: str) -> Booking:
        """
        Cancel a booking and free its current slot.

        Raises:
            BookingNotFoundException: booking does not exist
            AlreadyCancelledException: booking was already cancelled
        """
        self.log_operation("cancel_booking", booking_id=booking_id)
        with self.transaction():
            booking = self._get_for_update(booking_id)
            if booking.is_cancelled:
                prometheus_metrics.record_booking_transition("cancel", "conflict")
                raise AlreadyCancelledException(booking_id)

            booking.cancel(self.now())
            self.repository.flush()
            self._release_slot(booking.time_slot_id, booking_id)

        prometheus_metrics.record_booking_transition("cancel")
        return booking

    @BaseService.measure_operation("reschedule_booking")
    def reschedule(self, booking_id: str, new_time_slot_id: str) -> Booking:
        """
        Move a live booking to another free slot of the same trainer.

        The old slot is freed, the new slot is claimed and the booking keeps
        its ``original_time_slot_id``.

        Raises:
            BookingNotFoundException: booking does not exist
            AlreadyCancelledException: booking is cancelled
            NoOpRescheduleException: new slot is the current slot
            SlotNotFoundException: new slot does not exist or is retired
            TrainerMismatchException: new slot belongs to another trainer
            SlotAlreadyBookedException: new slot is held by a live booking
        """
        self.log_operation(
            "reschedule_booking", booking_id=booking_id, new_time_slot_id=new_time_slot_id
        )
        with self.transaction():
            booking = self._get_for_update(booking_id)
            if booking.is_cancelled:
                raise AlreadyCancelledException(booking_id)
            if booking.time_slot_id == new_time_slot_id:
                raise NoOpRescheduleException(booking_id, new_time_slot_id)

            new_slot = self.time_slot_repository.get_by_id(
                new_time_slot_id, load_relationships=False
            )
            if new_slot is None or new_slot.is_retired:
                raise SlotNotFoundException(new_time_slot_id)
            if new_slot.trainer_id != booking.trainer_id:
                raise TrainerMismatchException(new_time_slot_id, booking.trainer_id)
            if new_slot.is_booked:
                raise SlotAlreadyBookedException(new_time_slot_id)

            old_time_slot_id = booking.time_slot_id
            self._claim_slot(new_time_slot_id, transition="reschedule")
            self._release_slot(old_time_slot_id, booking_id)
            booking.move_to(new_time_slot_id, self.now())
            try:
                self.repository.flush()
            except IntegrityError as exc:
                if _is_unique_violation(exc):
                    raise SlotAlreadyBookedException(new_time_slot_id)
                raise

        prometheus_metrics.record_booking_transition("reschedule")
        self.logger.info(
            f"Booking {booking_id} moved {old_time_slot_id} -> {new_time_slot_id} "
            f"(reschedule #{booking.rescheduled_count})"
        )
        return booking

    @BaseService.measure_operation("update_accolades")
    def update_accolades(self, booking_id: str, accolades: List[str]) -> Booking:
        """Replace the booking's accolade ids wholesale."""
        with self.transaction():
            booking = self._get_for_update(booking_id)
            booking.accolades = list(accolades)
            booking.updated_at = self.now()
            self.repository.flush()
        return booking

    @BaseService.measure_operation("get_booking_details")
    def get_booking_details(self, booking_id: str) -> Booking:
        """
        Booking with customer, trainer and slot summaries loaded.

        Raises:
            BookingNotFoundException: booking does not exist
        """
        booking = self.repository.get_booking_with_details(booking_id)
        if booking is None:
            raise BookingNotFoundException(booking_id)
        return booking

    @BaseService.measure_operation("list_trainer_bookings")
    def list_bookings_by_trainer(
        self, trainer_id: str, page: int = 1, page_size: Optional[int] = None
    ) -> tuple[List[Booking], int]:
        """Trainer's bookings, newest first, with nested summaries loaded."""
        page_size = page_size or settings.default_page_size
        validate_page(page, page_size)
        return self.repository.get_trainer_bookings(trainer_id, page, page_size)

    # Internals

    def _get_for_update(self, booking_id: str) -> Booking:
        booking = self.repository.get_for_update(booking_id)
        if booking is None:
            raise BookingNotFoundException(booking_id)
        return booking

    def _claim_slot(self, time_slot_id: str, transition: str) -> None:
        if not self.time_slot_repository.mark_booked(time_slot_id):
            # Lost the race: someone booked it between our read and the update
            prometheus_metrics.record_booking_transition(transition, "conflict")
            self.logger.info(f"Slot {time_slot_id} was claimed concurrently")
            raise SlotAlreadyBookedException(time_slot_id)

    def _release_slot(self, time_slot_id: str, booking_id: str) -> None:
        if not self.time_slot_repository.mark_free(time_slot_id):
            self.logger.error(
                f"Slot {time_slot_id} of live booking {booking_id} was not marked booked"
            )
            raise ServiceException(
                "Booking and slot state diverged",
                code="SLOT_STATE_DIVERGED",
                details={"booking_id": booking_id, "time_slot_id": time_slot_id},
            )

    def _create_booking(self, customer_id: str, trainer_id: str, time_slot_id: str) -> Booking:
        try:
            return self.repository.create(
                customer_id=customer_id,
                trainer_id=trainer_id,
                time_slot_id=time_slot_id,
                original_time_slot_id=time_slot_id,
                created_at=self.now(),
                accolades=[],
            )
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                # A live booking already references this slot
                raise SlotAlreadyBookedException(time_slot_id)
            raise
