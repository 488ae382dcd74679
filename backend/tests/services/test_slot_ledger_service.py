from datetime import date

import pytest

from app.core.exceptions import InvalidSlotException, UserNotFoundException, ValidationException
from app.models.time_slot import TimeSlot
from app.services.slot_ledger import SlotLedgerService, validate_page

DAY = date(2024, 7, 10)


@pytest.fixture
def service(db, clock) -> SlotLedgerService:
    return SlotLedgerService(db, clock=clock)


class TestListTrainerSlots:
    def test_ordered_by_start_and_paginated(self, service, trainer, make_slot) -> None:
        for start, end in (("15:00", "16:00"), ("07:00", "08:00"), ("11:00", "12:00")):
            make_slot(trainer, start=start, end=end)

        page1, total = service.list_trainer_slots(trainer.id, DAY, page=1, page_size=2)
        page2, _ = service.list_trainer_slots(trainer.id, DAY, page=2, page_size=2)

        assert total == 3
        assert [s.start_hhmm for s in page1] == ["07:00", "11:00"]
        assert [s.start_hhmm for s in page2] == ["15:00"]

    def test_other_dates_and_trainers_excluded(
        self, service, trainer, other_trainer, make_slot
    ) -> None:
        make_slot(trainer)
        make_slot(trainer, day=date(2024, 7, 11))
        make_slot(other_trainer)

        slots, total = service.list_trainer_slots(trainer.id, DAY)

        assert total == 1
        assert slots[0].trainer_id == trainer.id

    def test_page_past_end_is_empty(self, service, trainer, make_slot) -> None:
        make_slot(trainer)

        slots, total = service.list_trainer_slots(trainer.id, DAY, page=5, page_size=10)

        assert slots == []
        assert total == 1


@pytest.mark.parametrize(
    "page,page_size,code",
    [(0, 10, "INVALID_PAGE"), (1, 0, "INVALID_PAGE_SIZE"), (1, 10_000, "INVALID_PAGE_SIZE")],
)
def test_validate_page_rejects(page, page_size, code) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_page(page, page_size)
    assert exc_info.value.code == code


class TestAdminSchedule:
    def test_create_slot_records_creator(self, service, db, admin, trainer) -> None:
        slot = service.create_slot(admin.id, trainer.id, DAY, "13:00", "14:30", "ALTERNATIVE")

        stored = db.get(TimeSlot, slot.id)
        assert stored.created_by == admin.id
        assert stored.daily_availability_id is None
        assert stored.duration_minutes == 90
        assert stored.slot_type == "ALTERNATIVE"
        assert stored.is_booked is False

    def test_create_slot_for_non_trainer(self, service, admin, customer) -> None:
        with pytest.raises(UserNotFoundException):
            service.create_slot(admin.id, customer.id, DAY, "13:00", "14:00")

    def test_create_slot_invalid_range(self, service, db, admin, trainer) -> None:
        with pytest.raises(InvalidSlotException):
            service.create_slot(admin.id, trainer.id, DAY, "14:00", "13:00")
        assert db.query(TimeSlot).count() == 0

    def test_list_slots_filters(self, service, admin, trainer, other_trainer, make_slot) -> None:
        service.create_slot(admin.id, trainer.id, DAY, "08:00", "09:00")
        service.create_slot(admin.id, other_trainer.id, DAY, "10:00", "11:00")
        make_slot(trainer, start="12:00", end="13:00")
        make_slot(trainer, day=date(2024, 7, 11))

        by_creator, total_by_creator = service.list_slots(created_by=admin.id)
        by_trainer_day, total_by_trainer_day = service.list_slots(day=DAY, trainer_id=trainer.id)
        everything, total = service.list_slots(page=1, page_size=100)

        assert total_by_creator == 2
        assert {s.trainer_id for s in by_creator} == {trainer.id, other_trainer.id}
        assert total_by_trainer_day == 2
        assert [s.start_hhmm for s in by_trainer_day] == ["08:00", "12:00"]
        assert total == 4
        assert len(everything) == 4
