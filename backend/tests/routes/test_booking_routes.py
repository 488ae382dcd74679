"""HTTP tests for booking endpoints."""

import pytest


@pytest.fixture
def book(client, headers_for):
    def _book(customer, trainer, slot):
        return client.post(
            f"/api/v1/trainers/{trainer.id}/bookings",
            json={"timeSlotId": slot.id},
            headers=headers_for(customer),
        )

    return _book


class TestBookSlot:
    def test_customer_books(self, book, trainer, customer, make_slot) -> None:
        slot = make_slot(trainer)

        response = book(customer, trainer, slot)

        assert response.status_code == 201
        body = response.json()
        assert body["timeSlotId"] == slot.id
        assert body["originalTimeSlotId"] == slot.id
        assert body["isCancelled"] is False
        assert body["rescheduledCount"] == 0
        assert body["createdAt"].startswith("2024-07-10T08:00")

    def test_double_booking_is_409(self, book, trainer, customer, other_customer, make_slot) -> None:
        slot = make_slot(trainer)
        book(customer, trainer, slot)

        response = book(other_customer, trainer, slot)

        assert response.status_code == 409
        assert response.json()["code"] == "SLOT_ALREADY_BOOKED"

    def test_trainer_mismatch_is_400(self, book, trainer, other_trainer, customer, make_slot) -> None:
        response = book(customer, other_trainer, make_slot(trainer))

        assert response.status_code == 400
        assert response.json()["code"] == "TRAINER_MISMATCH"

    def test_missing_slot_is_404(self, client, trainer, customer, headers_for) -> None:
        response = client.post(
            f"/api/v1/trainers/{trainer.id}/bookings",
            json={"timeSlotId": "01J0000000000000000000000X"},
            headers=headers_for(customer),
        )
        assert response.status_code == 404

    def test_trainer_cannot_book(self, book, trainer, make_slot) -> None:
        assert book(trainer, trainer, make_slot(trainer)).status_code == 403


class TestBookingTransitions:
    def test_cancel_then_rebook(
        self, client, book, trainer, customer, other_customer, make_slot, headers_for
    ) -> None:
        slot = make_slot(trainer)
        booking_id = book(customer, trainer, slot).json()["id"]

        cancelled = client.post(
            f"/api/v1/bookings/{booking_id}/cancel", headers=headers_for(customer)
        )
        assert cancelled.status_code == 200
        assert cancelled.json()["isCancelled"] is True

        again = client.post(f"/api/v1/bookings/{booking_id}/cancel", headers=headers_for(customer))
        assert again.status_code == 409

        assert book(other_customer, trainer, slot).status_code == 201

    def test_reschedule(self, client, book, trainer, customer, make_slot, headers_for) -> None:
        slot1 = make_slot(trainer, start="09:00", end="10:00")
        slot2 = make_slot(trainer, start="11:00", end="12:00")
        booking_id = book(customer, trainer, slot1).json()["id"]

        response = client.post(
            f"/api/v1/bookings/{booking_id}/reschedule",
            json={"newTimeSlotId": slot2.id},
            headers=headers_for(customer),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["timeSlotId"] == slot2.id
        assert body["originalTimeSlotId"] == slot1.id
        assert body["rescheduledCount"] == 1

        noop = client.post(
            f"/api/v1/bookings/{booking_id}/reschedule",
            json={"newTimeSlotId": slot2.id},
            headers=headers_for(customer),
        )
        assert noop.status_code == 409
        assert noop.json()["code"] == "NO_OP_RESCHEDULE"

    def test_attendance_by_trainer(self, client, book, trainer, customer, make_slot, headers_for) -> None:
        booking_id = book(customer, trainer, make_slot(trainer)).json()["id"]

        response = client.post(
            f"/api/v1/bookings/{booking_id}/attendance",
            json={"bookingStatus": "ATTENDED"},
            headers=headers_for(trainer),
        )

        assert response.status_code == 200
        assert response.json()["isAttendedByTrainer"] is True

    def test_customer_cannot_mark_attendance(
        self, client, book, trainer, customer, make_slot, headers_for
    ) -> None:
        booking_id = book(customer, trainer, make_slot(trainer)).json()["id"]

        response = client.post(
            f"/api/v1/bookings/{booking_id}/attendance",
            json={"attended": True},
            headers=headers_for(customer),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "BOOKING_FORBIDDEN"

    def test_accolades(self, client, book, trainer, customer, make_slot, headers_for) -> None:
        booking_id = book(customer, trainer, make_slot(trainer)).json()["id"]

        response = client.put(
            f"/api/v1/bookings/{booking_id}/accolades",
            json={"accolades": ["A1", "A2"]},
            headers=headers_for(trainer),
        )

        assert response.status_code == 200
        assert response.json()["accolades"] == ["A1", "A2"]

    def test_stranger_cannot_cancel(
        self, client, book, trainer, customer, other_customer, make_slot, headers_for
    ) -> None:
        booking_id = book(customer, trainer, make_slot(trainer)).json()["id"]

        response = client.post(
            f"/api/v1/bookings/{booking_id}/cancel", headers=headers_for(other_customer)
        )

        assert response.status_code == 403

    def test_admin_can_cancel(self, client, book, admin, trainer, customer, make_slot, headers_for) -> None:
        booking_id = book(customer, trainer, make_slot(trainer)).json()["id"]

        response = client.post(f"/api/v1/bookings/{booking_id}/cancel", headers=headers_for(admin))

        assert response.status_code == 200


class TestBookingReads:
    def test_details_nest_summaries(self, client, book, trainer, customer, make_slot, headers_for) -> None:
        slot = make_slot(trainer)
        booking_id = book(customer, trainer, slot).json()["id"]

        response = client.get(f"/api/v1/bookings/{booking_id}", headers=headers_for(customer))

        assert response.status_code == 200
        body = response.json()
        assert body["customer"]["firstName"] == "Casey"
        assert body["trainer"]["id"] == trainer.id
        assert body["timeSlot"]["start"] == "09:00"
        assert body["timeSlot"]["durationMinutes"] == 60
        assert body["originalTimeSlot"]["id"] == slot.id

    def test_unknown_booking_is_404(self, client, customer, headers_for) -> None:
        response = client.get(
            "/api/v1/bookings/01J0000000000000000000000X", headers=headers_for(customer)
        )
        assert response.status_code == 404
        assert response.json()["code"] == "BOOKING_NOT_FOUND"

    def test_trainer_lists_own_bookings(
        self, client, book, trainer, customer, make_slot, headers_for
    ) -> None:
        for start, end in (("09:00", "10:00"), ("11:00", "12:00")):
            book(customer, trainer, make_slot(trainer, start=start, end=end))

        response = client.get(
            f"/api/v1/trainers/{trainer.id}/bookings",
            params={"page": 1, "pageSize": 1},
            headers=headers_for(trainer),
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["bookings"]) == 1
        assert body["pagination"]["total"] == 2
        assert body["pagination"]["totalPages"] == 2

    def test_other_trainer_cannot_list(self, client, trainer, other_trainer, headers_for) -> None:
        response = client.get(
            f"/api/v1/trainers/{trainer.id}/bookings", headers=headers_for(other_trainer)
        )
        assert response.status_code == 403

    def test_customer_cannot_list_trainer_bookings(
        self, client, trainer, customer, headers_for
    ) -> None:
        response = client.get(
            f"/api/v1/trainers/{trainer.id}/bookings", headers=headers_for(customer)
        )
        assert response.status_code == 403
