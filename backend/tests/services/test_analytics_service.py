"""AnalyticsService rollups over real bookings."""

from datetime import date, datetime

import pytest

from app.core.clock import fixed_clock
from app.core.enums import Trend
from app.schemas.availability import AvailabilityUpdate
from app.services.analytics_service import AnalyticsService, hour_range_label, trend_between
from app.services.availability_service import AvailabilityService
from app.services.booking_service import BookingService


@pytest.fixture
def bookings(db, clock) -> BookingService:
    return BookingService(db, clock=clock)


@pytest.fixture
def analytics(db, clock) -> AnalyticsService:
    return AnalyticsService(db, clock=clock)


def test_hour_range_label_truncates_to_hours() -> None:
    assert (
        hour_range_label(datetime(2024, 7, 10, 9, 30), datetime(2024, 7, 10, 10, 30))
        == "09:00-10:00"
    )


@pytest.mark.parametrize(
    "current,previous,expected",
    [(3, 1, Trend.UP), (1, 3, Trend.DOWN), (2, 2, Trend.STABLE), (0, 0, Trend.STABLE)],
)
def test_trend_between(current, previous, expected) -> None:
    assert trend_between(current, previous) is expected


class TestSummaryForRange:
    def test_set_book_attend_gives_full_completion(
        self, db, clock, bookings, analytics, trainer, customer
    ) -> None:
        view = AvailabilityService(db, clock=clock).set_availability(
            trainer.id,
            AvailabilityUpdate(
                date=date(2024, 7, 10), peak_slots=[{"start": "09:00", "end": "10:00"}]
            ),
        )
        booking = bookings.book(customer.id, trainer.id, view.peak_slots[0].id)
        bookings.mark_attended(booking.id, True)

        summary = analytics.summary_for_range(
            trainer.id, datetime(2024, 7, 10), datetime(2024, 7, 10, 23, 59, 59)
        )

        assert summary.booked == 1
        assert summary.attended == 1
        assert summary.sessions_completed_percentage == 100

    def test_nothing_booked_is_zero_percent(self, analytics, trainer) -> None:
        summary = analytics.summary_for_range(
            trainer.id, datetime(2024, 7, 1), datetime(2024, 7, 31, 23, 59)
        )
        assert (summary.booked, summary.attended, summary.sessions_completed_percentage) == (
            0,
            0,
            0.0,
        )

    def test_partial_attendance_rounds(self, bookings, analytics, trainer, customer, make_slot) -> None:
        ids = [
            bookings.book(customer.id, trainer.id, make_slot(trainer, start=s, end=e).id).id
            for s, e in (("08:00", "09:00"), ("09:00", "10:00"), ("10:00", "11:00"))
        ]
        bookings.mark_attended(ids[0], True)

        summary = analytics.summary_for_range(
            trainer.id, datetime(2024, 7, 8), datetime(2024, 7, 14, 23, 59)
        )

        assert summary.booked == 3
        assert summary.sessions_completed_percentage == 33.33


class TestPopularSlots:
    def test_most_booked_label_per_month(self, bookings, analytics, trainer, customer, make_slot) -> None:
        for day, start, end in (
            (date(2024, 7, 1), "09:00", "10:00"),
            (date(2024, 7, 2), "09:00", "10:00"),
            (date(2024, 7, 3), "17:00", "18:00"),
            (date(2024, 8, 5), "18:00", "19:00"),
        ):
            bookings.book(customer.id, trainer.id, make_slot(trainer, day=day, start=start, end=end).id)

        stats = analytics.monthly_popular_slot_stats(trainer.id)

        assert [(s.month, s.label, s.count) for s in stats] == [
            ("2024-07", "09:00-10:00", 2),
            ("2024-08", "18:00-19:00", 1),
        ]

    def test_ties_break_on_earliest_label(self, bookings, analytics, trainer, customer, make_slot) -> None:
        # Later hour booked first so insertion order would pick it
        for start, end in (("17:00", "18:00"), ("08:00", "09:00")):
            bookings.book(customer.id, trainer.id, make_slot(trainer, start=start, end=end).id)

        stats = analytics.monthly_popular_slot_stats(trainer.id)

        assert stats[0].label == "08:00-09:00"
        assert stats[0].count == 1

    def test_cancelled_bookings_ignored(self, bookings, analytics, trainer, customer, make_slot) -> None:
        booking = bookings.book(customer.id, trainer.id, make_slot(trainer).id)
        bookings.cancel(booking.id)

        assert analytics.monthly_popular_slot_stats(trainer.id) == []


class TestDashboard:
    def test_dashboard_shape(self, db, bookings, trainer, customer, make_slot) -> None:
        # Clock: Wednesday 2024-07-10 08:00
        this_week = [
            make_slot(trainer, day=date(2024, 7, 8), start="09:00", end="10:00"),
            make_slot(trainer, day=date(2024, 7, 10), start="09:00", end="10:30"),
            make_slot(trainer, day=date(2024, 7, 12), start="14:00", end="15:00"),
        ]
        last_week = make_slot(trainer, day=date(2024, 7, 3), start="09:00", end="10:00")
        for slot in this_week + [last_week]:
            bookings.book(customer.id, trainer.id, slot.id)

        dashboard = AnalyticsService(db, clock=fixed_clock(datetime(2024, 7, 10, 8, 0))).dashboard(
            trainer.id
        )

        weekly = dashboard.weekly.booking_statistics
        assert weekly.chart.labels == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert weekly.chart.data == [1, 0, 1, 0, 1, 0, 0]
        assert weekly.total_sessions == 3
        assert weekly.trend == Trend.UP.value

        monthly = dashboard.monthly.booking_statistics
        assert monthly.chart.labels == ["Week 1", "Week 2", "Week 3", "Week 4", "Week 5"]
        assert monthly.chart.data == [1, 3, 0, 0, 0]
        assert monthly.total_sessions == 4

        yearly = dashboard.yearly.booking_statistics
        assert len(yearly.chart.labels) == 12
        assert yearly.chart.data[6] == 4
        assert yearly.trend == Trend.UP.value

        assert dashboard.weekly.summary.booked == 3
        assert dashboard.total_working_hours == 3.5

        next_session = dashboard.next_session
        assert next_session is not None
        assert next_session.date == date(2024, 7, 10)
        assert next_session.time == "09:00-10:30"
        assert next_session.client_name == "Casey Customer"
        assert next_session.actions.can_reschedule is True
        assert next_session.actions.can_cancel is True

    def test_empty_dashboard(self, analytics, trainer) -> None:
        dashboard = analytics.dashboard(trainer.id)

        assert dashboard.next_session is None
        assert dashboard.popular_slots == []
        assert dashboard.total_working_hours == 0.0
        assert dashboard.weekly.booking_statistics.trend == Trend.STABLE.value
        assert dashboard.weekly.summary.sessions_completed_percentage == 0.0

    def test_attended_next_session_cannot_be_rescheduled(
        self, bookings, analytics, trainer, customer, make_slot
    ) -> None:
        booking = bookings.book(customer.id, trainer.id, make_slot(trainer, start="12:00", end="13:00").id)
        bookings.mark_attended(booking.id, True)

        next_session = analytics.dashboard(trainer.id).next_session

        assert next_session.booking_id == booking.id
        assert next_session.actions.can_reschedule is False
