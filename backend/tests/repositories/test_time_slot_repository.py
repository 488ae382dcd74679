from datetime import date, datetime

from app.repositories.factory import RepositoryFactory
from app.services.booking_service import BookingService
from app.utils.date_ranges import week_bounds


class TestConditionalBookedFlags:
    def test_mark_booked_only_once(self, db, trainer, make_slot) -> None:
        repo = RepositoryFactory.create_time_slot_repository(db)
        slot = make_slot(trainer)

        assert repo.mark_booked(slot.id) is True
        assert repo.mark_booked(slot.id) is False
        assert slot.is_booked is True

    def test_mark_free_requires_booked(self, db, trainer, make_slot) -> None:
        repo = RepositoryFactory.create_time_slot_repository(db)
        slot = make_slot(trainer)

        assert repo.mark_free(slot.id) is False
        repo.mark_booked(slot.id)
        assert repo.mark_free(slot.id) is True

    def test_unknown_slot_cannot_be_claimed(self, db) -> None:
        repo = RepositoryFactory.create_time_slot_repository(db)
        assert repo.mark_booked("01J0000000000000000000000X") is False


class TestDailySlots:
    def test_bulk_create_and_delete_for_daily(self, db, trainer) -> None:
        availability = RepositoryFactory.create_availability_repository(db)
        slots = RepositoryFactory.create_time_slot_repository(db)
        week = availability.get_or_create_week(trainer.id, *_week())
        daily, created = availability.get_or_create_day(
            trainer.id, week.id, date(2024, 7, 10), "Wednesday", True
        )
        assert created is True

        rows = [
            {
                "trainer_id": trainer.id,
                "daily_availability_id": daily.id,
                "date": date(2024, 7, 10),
                "start_time": _at(hour),
                "end_time": _at(hour + 1),
                "slot_type": "PEAK",
                "duration_minutes": 60,
            }
            for hour in (9, 11)
        ]
        created_slots = slots.bulk_create(rows)

        assert [s.id for s in slots.get_for_daily(daily.id)] == [s.id for s in created_slots]
        assert slots.locked_ids_for_daily(daily.id) == []

        slots.mark_booked(created_slots[1].id)
        assert slots.locked_ids_for_daily(daily.id) == [created_slots[1].id]

        slots.mark_free(created_slots[1].id)
        assert slots.delete_for_daily(daily.id) == 2
        assert slots.get_for_daily(daily.id) == []

    def test_slots_referenced_by_bookings_are_retired_not_deleted(
        self, db, clock, trainer, customer
    ) -> None:
        availability = RepositoryFactory.create_availability_repository(db)
        slots = RepositoryFactory.create_time_slot_repository(db)
        week = availability.get_or_create_week(trainer.id, *_week())
        daily, _ = availability.get_or_create_day(
            trainer.id, week.id, date(2024, 7, 10), "Wednesday", True
        )
        kept, dropped = slots.bulk_create(
            [
                {
                    "trainer_id": trainer.id,
                    "daily_availability_id": daily.id,
                    "date": date(2024, 7, 10),
                    "start_time": _at(hour),
                    "end_time": _at(hour + 1),
                    "slot_type": "PEAK",
                    "duration_minutes": 60,
                }
                for hour in (9, 11)
            ]
        )
        db.commit()
        bookings = BookingService(db, clock=clock)
        bookings.cancel(bookings.book(customer.id, trainer.id, kept.id).id)

        assert slots.locked_ids_for_daily(daily.id) == []
        assert slots.detach_referenced_for_daily(daily.id) == 1
        assert slots.delete_for_daily(daily.id) == 1

        assert slots.get_by_id(dropped.id, load_relationships=False) is None
        survivor = slots.get_by_id(kept.id, load_relationships=False)
        assert survivor.daily_availability_id is None
        assert survivor.is_retired is True
        assert slots.mark_booked(kept.id) is False
        assert slots.get_trainer_slots_for_date(trainer.id, date(2024, 7, 10), 1, 10) == ([], 0)


class TestWeekAccumulator:
    def test_increment_is_relative(self, db, trainer) -> None:
        availability = RepositoryFactory.create_availability_repository(db)
        week = availability.get_or_create_week(trainer.id, *_week())

        availability.increment_week_minutes(week.id, 90)
        availability.increment_week_minutes(week.id, -30)
        assert availability.increment_week_minutes(week.id, 0) == 0

        db.refresh(week)
        assert week.total_booked_minutes == 60

    def test_get_or_create_week_reuses_row(self, db, trainer) -> None:
        availability = RepositoryFactory.create_availability_repository(db)

        first = availability.get_or_create_week(trainer.id, *_week())
        second = availability.get_or_create_week(trainer.id, *_week())

        assert first.id == second.id

    def test_count_leave_days_in_range(self, db, trainer) -> None:
        availability = RepositoryFactory.create_availability_repository(db)
        week = availability.get_or_create_week(trainer.id, *_week())
        availability.get_or_create_day(trainer.id, week.id, date(2024, 7, 9), "Tuesday", False)
        availability.get_or_create_day(trainer.id, week.id, date(2024, 7, 10), "Wednesday", True)

        assert availability.count_leave_days(trainer.id, date(2024, 7, 1), date(2024, 7, 31)) == 1
        assert availability.count_leave_days(trainer.id, date(2024, 8, 1), date(2024, 8, 31)) == 0


def _week():
    return week_bounds(date(2024, 7, 10))


def _at(hour: int) -> datetime:
    return datetime(2024, 7, 10, hour, 0)
