# backend/app/services/slot_ledger.py
"""
Slot Ledger Service: read access to a trainer's bookable slots and the admin
scheduling flow that creates slots outside any availability day.

The ledger never flips ``is_booked``; only BookingService does.
"""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..core.config import settings
from ..core.enums import SlotType
from ..core.exceptions import UserNotFoundException, ValidationException
from ..models.time_slot import TimeSlot
from ..repositories.factory import RepositoryFactory
from .base import BaseService
from .time_slot_generator import build_slot

logger = logging.getLogger(__name__)


def validate_page(page: int, page_size: int) -> None:
    """
    Raises:
        ValidationException: page below 1 or page size outside 1..max_page_size
    """
    if page < 1:
        raise ValidationException("page must be at least 1", code="INVALID_PAGE")
    if page_size < 1 or page_size > settings.max_page_size:
        raise ValidationException(
            f"pageSize must be between 1 and {settings.max_page_size}",
            code="INVALID_PAGE_SIZE",
        )


class SlotLedgerService(BaseService):
    """Service for listing and scheduling trainer time slots."""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        super().__init__(db, clock=clock)
        self.repository = RepositoryFactory.create_time_slot_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("list_trainer_slots")
    def list_trainer_slots(
        self, trainer_id: str, day: date, page: int = 1, page_size: Optional[int] = None
    ) -> tuple[List[TimeSlot], int]:
        """
        Slots for one trainer on one date, ordered by start time.

        Returns:
            (page of slots, total matching slots)
        """
        page_size = page_size or settings.default_page_size
        validate_page(page, page_size)
        return self.repository.get_trainer_slots_for_date(trainer_id, day, page, page_size)

    @BaseService.measure_operation("list_slots")
    def list_slots(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        day: Optional[date] = None,
        created_by: Optional[str] = None,
        trainer_id: Optional[str] = None,
    ) -> tuple[List[TimeSlot], int]:
        page_size = page_size or settings.default_page_size
        validate_page(page, page_size)
        return self.repository.list_slots(
            page, page_size, day=day, created_by=created_by, trainer_id=trainer_id
        )

    @BaseService.measure_operation("create_slot")
    def create_slot(
        self,
        created_by: str,
        trainer_id: str,
        day: date,
        start: str,
        end: str,
        slot_type: SlotType | str = SlotType.PEAK,
    ) -> TimeSlot:
        """
        Create a free slot directly in the ledger (no availability row).

        Raises:
            InvalidSlotException: malformed times or end not after start
            UserNotFoundException: trainer missing or not a trainer
        """
        generated = build_slot(trainer_id, day, start, end, slot_type)

        self.log_operation("create_slot", trainer_id=trainer_id, created_by=created_by)
        with self.transaction():
            trainer = self.user_repository.get_by_id(trainer_id)
            if trainer is None or not trainer.is_trainer:
                raise UserNotFoundException(trainer_id)

            slot = self.repository.create(**generated.as_row(created_by=created_by))
            self.logger.info(
                f"Admin {created_by} scheduled slot {slot.id} for {trainer_id} "
                f"on {day} {start}-{end}"
            )
            return slot
