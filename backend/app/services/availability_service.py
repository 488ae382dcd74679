# backend/app/services/availability_service.py
"""
Availability Service for the trainer booking platform.

Owns the weekly/daily availability rows and the slots generated from them:
- Reading one day's availability as a view
- Destructively replacing a day's slots from peak/alternative ranges
- Keeping the week's booked-minute total equal to the sum of its days

Leave requests (``isAvailable=false``) are routed through LeavePolicyService.
"""

from datetime import date
import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..core.enums import SlotType
from ..core.exceptions import BookedSlotsLockedException
from ..models.availability import DailyAvailability, WeeklyAvailability
from ..repositories.factory import RepositoryFactory
from ..schemas.availability import AvailabilityUpdate, DailyAvailabilityView, SlotView
from ..utils.date_ranges import day_name, week_bounds
from .base import BaseService
from .time_slot_generator import generate_slots

if TYPE_CHECKING:
    from .leave_policy import LeavePolicyService

logger = logging.getLogger(__name__)


def build_daily_view(daily: DailyAvailability, week: WeeklyAvailability) -> DailyAvailabilityView:
    """Reshape a daily row, its week and its slots into the API view."""
    peak, alternative = [], []
    for slot in sorted(daily.time_slots, key=lambda s: s.start_time):
        view = SlotView(
            id=slot.id, start=slot.start_hhmm, end=slot.end_hhmm, is_booked=slot.is_booked
        )
        (peak if slot.slot_type == SlotType.PEAK.value else alternative).append(view)

    return DailyAvailabilityView(
        id=daily.id,
        trainer_id=daily.trainer_id,
        date=daily.date,
        day_of_week=daily.day_of_week,
        is_available=daily.is_available,
        total_day_minutes=daily.total_day_minutes,
        required_minutes=week.required_minutes,
        total_booked_minutes=week.total_booked_minutes,
        week_start_date=week.week_start_date,
        week_end_date=week.week_end_date,
        peak_slots=peak,
        alternative_slots=alternative,
    )


class AvailabilityService(BaseService):
    """
    Service layer for trainer availability.

    ``write_day`` is the single path that mutates a day; both availability
    updates and leave go through it so the weekly total stays consistent.
    """

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        leave_policy: Optional["LeavePolicyService"] = None,
    ):
        super().__init__(db, clock=clock)
        self.availability_repository = RepositoryFactory.create_availability_repository(db)
        self.time_slot_repository = RepositoryFactory.create_time_slot_repository(db)
        self._leave_policy = leave_policy

    @property
    def leave_policy(self) -> "LeavePolicyService":
        if self._leave_policy is None:
            from .leave_policy import LeavePolicyService

            self._leave_policy = LeavePolicyService(self.db, clock=self.clock, availability=self)
        return self._leave_policy

    @BaseService.measure_operation("get_availability")
    def get_availability(self, trainer_id: str, day: date) -> Optional[DailyAvailabilityView]:
        """
        Get one day's availability.

        Returns:
            The day view, or None when the trainer has no row for ``day``
        """
        daily = self.availability_repository.find_day(trainer_id, day)
        if daily is None:
            return None
        return build_daily_view(daily, daily.week)

    @BaseService.measure_operation("set_availability")
    def set_availability(self, trainer_id: str, data: AvailabilityUpdate) -> DailyAvailabilityView:
        """
        Set a trainer's availability for one date.

        Existing slots for the date are replaced, not merged. A request with
        ``is_available=False`` is a leave request and is checked against the
        monthly leave limit before anything is written.

        Raises:
            InvalidSlotException: a range is malformed or ranges overlap
            LeaveLimitExceededException: leave requested over the monthly limit
            BookedSlotsLockedException: a slot on the day holds a live booking
        """
        if not data.is_available:
            return self.leave_policy.apply_leave(trainer_id, data.date)

        self.log_operation("set_availability", trainer_id=trainer_id, date=str(data.date))
        with self.transaction():
            daily, week = self.write_day(
                trainer_id,
                data.date,
                is_available=True,
                peak_slots=data.peak_slots,
                alternative_slots=data.alternative_slots,
            )
            return build_daily_view(daily, week)

    def write_day(
        self,
        trainer_id: str,
        day: date,
        is_available: bool,
        peak_slots: Iterable[Any] = (),
        alternative_slots: Iterable[Any] = (),
    ) -> tuple[DailyAvailability, WeeklyAvailability]:
        """
        Replace one day's availability inside the caller's transaction.

        Steps: find-or-create the week and day, refuse if any slot holds a live
        booking, unlink slots that past bookings still reference, delete the
        rest, insert the new ones, then move the week total by the change in
        day minutes.
        """
        # Validate ranges before touching the store
        generated = (
            generate_slots(trainer_id, day, peak_slots, alternative_slots) if is_available else []
        )

        week_start, week_end = week_bounds(day)
        week = self.availability_repository.get_or_create_week(trainer_id, week_start, week_end)
        daily, created = self.availability_repository.get_or_create_day(
            trainer_id, week.id, day, day_name(day), is_available
        )

        previous_minutes = 0 if created else daily.total_day_minutes
        if not created:
            locked = self.time_slot_repository.locked_ids_for_daily(daily.id)
            if locked:
                raise BookedSlotsLockedException(trainer_id, day.isoformat(), locked)
            detached = self.time_slot_repository.detach_referenced_for_daily(daily.id)
            if detached:
                self.logger.debug(f"Kept {detached} slots referenced by past bookings")
            self.db.expire(daily, ["time_slots"])
            removed = self.time_slot_repository.delete_for_daily(daily.id)
            if removed:
                self.logger.debug(f"Removed {removed} slots for {trainer_id} on {day}")

        self.time_slot_repository.bulk_create(
            [slot.as_row(daily_availability_id=daily.id) for slot in generated]
        )

        daily.is_available = is_available
        daily.total_day_minutes = sum(slot.duration_minutes for slot in generated)
        self.availability_repository.flush()

        delta = daily.total_day_minutes - previous_minutes
        self.availability_repository.increment_week_minutes(week.id, delta)

        self.db.expire(daily, ["time_slots"])
        self.db.refresh(week)
        self.logger.info(
            f"Availability for {trainer_id} on {day}: available={is_available}, "
            f"minutes={daily.total_day_minutes} (week delta {delta:+d})"
        )
        return daily, week
