class TestTrainerSlots:
    def test_paginated_listing(self, client, trainer, customer, make_slot, headers_for) -> None:
        for start, end in (("07:00", "08:00"), ("09:00", "10:00"), ("11:00", "12:00")):
            make_slot(trainer, start=start, end=end)

        response = client.get(
            f"/api/v1/trainers/{trainer.id}/time-slots",
            params={"date": "2024-07-10", "page": 2, "pageSize": 2},
            headers=headers_for(customer),
        )

        assert response.status_code == 200
        body = response.json()
        assert [s["start"] for s in body["slots"]] == ["11:00"]
        assert body["pagination"] == {"total": 3, "page": 2, "pageSize": 2, "totalPages": 2}

    def test_page_size_over_limit_is_422(self, client, trainer, headers_for) -> None:
        response = client.get(
            f"/api/v1/trainers/{trainer.id}/time-slots",
            params={"date": "2024-07-10", "pageSize": 1000},
            headers=headers_for(trainer),
        )
        assert response.status_code == 422

    def test_bad_trainer_id_is_422(self, client, trainer, headers_for) -> None:
        response = client.get(
            "/api/v1/trainers/not-a-ulid/time-slots",
            params={"date": "2024-07-10"},
            headers=headers_for(trainer),
        )
        assert response.status_code == 422


class TestAdminSlots:
    def test_admin_creates_and_lists(self, client, admin, trainer, headers_for) -> None:
        created = client.post(
            "/api/v1/time-slots",
            json={
                "trainerId": trainer.id,
                "date": "2024-07-10",
                "start": "13:00",
                "end": "14:00",
                "slotType": "ALTERNATIVE",
            },
            headers=headers_for(admin),
        )

        assert created.status_code == 201
        slot = created.json()
        assert slot["createdBy"] == admin.id
        assert slot["durationMinutes"] == 60
        assert slot["isBooked"] is False

        listed = client.get(
            "/api/v1/time-slots",
            params={"createdBy": admin.id, "date": "2024-07-10"},
            headers=headers_for(admin),
        )
        assert listed.status_code == 200
        assert [s["id"] for s in listed.json()["slots"]] == [slot["id"]]

    def test_non_admin_forbidden(self, client, trainer, headers_for) -> None:
        response = client.post(
            "/api/v1/time-slots",
            json={"trainerId": trainer.id, "date": "2024-07-10", "start": "13:00", "end": "14:00"},
            headers=headers_for(trainer),
        )
        assert response.status_code == 403

    def test_unknown_trainer_is_404(self, client, admin, customer, headers_for) -> None:
        response = client.post(
            "/api/v1/time-slots",
            json={"trainerId": customer.id, "date": "2024-07-10", "start": "13:00", "end": "14:00"},
            headers=headers_for(admin),
        )
        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"
