from app.core.config import settings


def test_health_reports_database(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "ok"
    assert response.headers["cache-control"] == "no-store"


def test_metrics_exposes_booking_counters(client, trainer, customer, make_slot, headers_for) -> None:
    client.post(
        f"/api/v1/trainers/{trainer.id}/bookings",
        json={"timeSlotId": make_slot(trainer).id},
        headers=headers_for(customer),
    )

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "trainer_booking_transitions_total" in response.text
    assert 'operation="book_slot"' in response.text


def test_metrics_can_be_disabled(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "metrics_enabled", False)

    assert client.get("/metrics").status_code == 404


def test_unknown_route_uses_problem_envelope(client) -> None:
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    assert response.json()["status"] == 404
    assert response.json()["instance"] == "/api/v1/nope"
