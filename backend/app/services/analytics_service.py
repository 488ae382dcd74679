# backend/app/services/analytics_service.py
"""
Analytics Service: read-only utilization rollups for a trainer.

Provides:
- Booked vs attended summaries for any datetime range
- Per-month most popular hour range
- The dashboard payload (weekly/monthly/yearly summaries, charts and trends,
  popular slots, next session, hours worked this week)
"""

from collections import Counter, defaultdict
from datetime import date, datetime
import logging
from typing import Callable, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.clock import Clock
from ..core.constants import DAY_LABELS, MONTH_LABELS
from ..core.enums import Trend
from ..repositories.factory import RepositoryFactory
from ..schemas.analytics import (
    BookingStatistics,
    ChartData,
    DashboardAnalyticsResponse,
    NextSession,
    NextSessionActions,
    PeriodAnalytics,
    PeriodSummary,
    PopularSlot,
)
from ..utils.date_ranges import (
    DateTimeRange,
    month_bounds,
    previous_month_bounds,
    previous_week_bounds,
    previous_year_bounds,
    week_bounds,
    week_of_month,
    year_bounds,
)
from .base import BaseService

logger = logging.getLogger(__name__)


def hour_range_label(start: datetime, end: datetime) -> str:
    """Bucket label for a slot, e.g. 09:30-10:30 -> ``09:00-10:00``."""
    return f"{start.hour:02d}:00-{end.hour:02d}:00"


def trend_between(current: int, previous: int) -> Trend:
    if current > previous:
        return Trend.UP
    if current < previous:
        return Trend.DOWN
    return Trend.STABLE


class AnalyticsService(BaseService):
    """Derived, read-only reporting over the slot ledger and bookings."""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        super().__init__(db, clock=clock)
        self.repository = RepositoryFactory.create_analytics_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)

    @BaseService.measure_operation("summary_for_range")
    def summary_for_range(self, trainer_id: str, start: datetime, end: datetime) -> PeriodSummary:
        """
        Booked vs attended for [start, end].

        ``booked`` counts booked slots dated in the range; ``attended`` counts
        bookings created in the range and marked attended. The percentage is 0
        when nothing is booked.
        """
        booked = self.repository.count_booked_slots(trainer_id, start.date(), end.date())
        attended = self.repository.count_attended(trainer_id, start, end)
        percentage = round(attended / booked * 100, 2) if booked else 0.0
        return PeriodSummary(
            booked=booked, attended=attended, sessions_completed_percentage=percentage
        )

    @BaseService.measure_operation("monthly_popular_slot_stats")
    def monthly_popular_slot_stats(self, trainer_id: str) -> List[PopularSlot]:
        """
        Most booked hour range per month of slot date, live bookings only.

        Ties go to the smallest label, which is also the earliest hour.
        """
        by_month: Dict[str, Counter] = defaultdict(Counter)
        for slot_date, start, end in self.repository.live_booking_slot_windows(trainer_id):
            by_month[f"{slot_date:%Y-%m}"][hour_range_label(start, end)] += 1

        stats = []
        for month in sorted(by_month):
            label, count = min(by_month[month].items(), key=lambda item: (-item[1], item[0]))
            stats.append(PopularSlot(month=month, label=label, count=count))
        return stats

    @BaseService.measure_operation("dashboard_analytics")
    def dashboard(self, trainer_id: str) -> DashboardAnalyticsResponse:
        now = self.now()
        today = now.date()

        weekly = self._period(
            trainer_id,
            week_bounds(today),
            previous_week_bounds(today),
            labels=list(DAY_LABELS),
            bucket=lambda d: d.weekday(),
        )

        month_range = month_bounds(today)
        weeks_in_month = week_of_month(month_range[1].date())
        monthly = self._period(
            trainer_id,
            month_range,
            previous_month_bounds(today),
            labels=[f"Week {n}" for n in range(1, weeks_in_month + 1)],
            bucket=lambda d: week_of_month(d) - 1,
        )

        yearly = self._period(
            trainer_id,
            year_bounds(today),
            previous_year_bounds(today),
            labels=list(MONTH_LABELS),
            bucket=lambda d: d.month - 1,
        )

        week_start, week_end = week_bounds(today)
        booked_minutes = self.repository.sum_booked_minutes(
            trainer_id, week_start.date(), week_end.date()
        )

        return DashboardAnalyticsResponse(
            weekly=weekly,
            monthly=monthly,
            yearly=yearly,
            popular_slots=self.monthly_popular_slot_stats(trainer_id),
            next_session=self._next_session(trainer_id, now),
            total_working_hours=round(booked_minutes / 60, 1),
        )

    def _period(
        self,
        trainer_id: str,
        current: DateTimeRange,
        previous: DateTimeRange,
        labels: Sequence[str],
        bucket: Callable[[date], int],
    ) -> PeriodAnalytics:
        start, end = current
        dates = self.repository.live_session_dates(trainer_id, start.date(), end.date())
        previous_total = len(
            self.repository.live_session_dates(trainer_id, previous[0].date(), previous[1].date())
        )

        data = [0] * len(labels)
        for session_date in dates:
            data[bucket(session_date)] += 1

        return PeriodAnalytics(
            summary=self.summary_for_range(trainer_id, start, end),
            booking_statistics=BookingStatistics(
                total_sessions=len(dates),
                trend=trend_between(len(dates), previous_total),
                chart=ChartData(labels=list(labels), data=data),
            ),
        )

    def _next_session(self, trainer_id: str, now: datetime) -> Optional[NextSession]:
        booking = self.booking_repository.get_next_upcoming(trainer_id, now)
        if booking is None:
            return None
        slot = booking.time_slot
        customer = booking.customer
        return NextSession(
            booking_id=booking.id,
            client_name=(customer.full_name or customer.email) if customer else "",
            date=slot.date,
            time=f"{slot.start_hhmm}-{slot.end_hhmm}",
            actions=NextSessionActions(
                can_reschedule=booking.is_attended_by_trainer is None,
                can_cancel=True,
            ),
        )
