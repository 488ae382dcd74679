# backend/app/services/leave_policy.py
"""
Leave policy: a trainer may take a limited number of leave days per month.

A leave day is a DailyAvailability row with ``is_available=False``. The limit
is counted in leave days within the calendar month of the requested date,
configured by ``settings.leave_days_per_month`` (one by default).
"""

from datetime import date
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..core.config import settings
from ..core.exceptions import LeaveLimitExceededException
from ..repositories.factory import RepositoryFactory
from ..schemas.availability import DailyAvailabilityView, LeaveEligibility
from ..utils.date_ranges import month_bounds
from .availability_service import AvailabilityService, build_daily_view
from .base import BaseService

logger = logging.getLogger(__name__)


class LeavePolicyService(BaseService):
    """Checks and applies monthly leave for trainers."""

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        availability: Optional[AvailabilityService] = None,
        leave_days_per_month: Optional[int] = None,
    ):
        super().__init__(db, clock=clock)
        self.availability_repository = RepositoryFactory.create_availability_repository(db)
        self.leave_days_per_month = (
            settings.leave_days_per_month if leave_days_per_month is None else leave_days_per_month
        )
        self._availability = availability

    @property
    def availability(self) -> AvailabilityService:
        if self._availability is None:
            self._availability = AvailabilityService(self.db, clock=self.clock, leave_policy=self)
        return self._availability

    def leave_days_used(self, trainer_id: str, day: date) -> int:
        month_start, month_end = month_bounds(day)
        return self.availability_repository.count_leave_days(
            trainer_id, month_start.date(), month_end.date()
        )

    @BaseService.measure_operation("can_apply_leave")
    def can_apply_leave(self, trainer_id: str, day: date) -> bool:
        """True when the trainer has leave days left in ``day``'s month."""
        return self.leave_days_used(trainer_id, day) < self.leave_days_per_month

    def check_eligibility(self, trainer_id: str, day: date) -> LeaveEligibility:
        used = self.leave_days_used(trainer_id, day)
        allowed = used < self.leave_days_per_month
        return LeaveEligibility(
            trainer_id=trainer_id,
            date=day,
            month=f"{day:%Y-%m}",
            leave_days_used=used,
            leave_days_allowed=self.leave_days_per_month,
            can_apply_leave=allowed,
            message=None
            if allowed
            else LeaveLimitExceededException(
                trainer_id, f"{day:%Y-%m}", self.leave_days_per_month
            ).message,
        )

    @BaseService.measure_operation("apply_leave")
    def apply_leave(self, trainer_id: str, day: date) -> DailyAvailabilityView:
        """
        Mark ``day`` as a leave day and purge its slots.

        Re-applying leave to a day already on leave changes nothing.

        Raises:
            LeaveLimitExceededException: the month's leave allowance is used up
            BookedSlotsLockedException: a slot on the day holds a live booking
        """
        self.log_operation("apply_leave", trainer_id=trainer_id, date=str(day))
        with self.transaction():
            existing = self.availability_repository.find_day(trainer_id, day)
            if existing is not None and not existing.is_available:
                self.logger.info(f"{trainer_id} is already on leave on {day}")
                return build_daily_view(existing, existing.week)

            if not self.can_apply_leave(trainer_id, day):
                self.logger.info(f"Leave rejected for {trainer_id} on {day}: monthly limit reached")
                raise LeaveLimitExceededException(
                    trainer_id, f"{day:%Y-%m}", self.leave_days_per_month
                )

            daily, week = self.availability.write_day(trainer_id, day, is_available=False)
            return build_daily_view(daily, week)
