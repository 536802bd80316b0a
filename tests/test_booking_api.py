from __future__ import annotations

import random
from dataclasses import replace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from hotel_backend.controllers.booking_controller import router
from hotel_backend.services.allocation_service import RoomAllocationService
from hotel_backend.services.hotel_state_service import HotelStateService
from hotel_backend.utils.config import get_settings


def _build_test_settings(**overrides):
    get_settings.cache_clear()
    return replace(get_settings(), hotel_random_seed=3, **overrides)


def _build_test_app(**overrides) -> tuple[FastAPI, HotelStateService]:
    settings = _build_test_settings(**overrides)
    allocation_service = RoomAllocationService(settings=settings)
    hotel_state_service = HotelStateService(
        settings=settings,
        allocation_service=allocation_service,
        rng=random.Random(3),
    )

    app = FastAPI()
    app.include_router(router)
    app.state.allocation_service = allocation_service
    app.state.hotel_state_service = hotel_state_service
    return app, hotel_state_service


def test_booking_flow_end_to_end() -> None:
    app, service = _build_test_app()
    client = TestClient(app)

    rooms_response = client.get("/rooms")
    assert rooms_response.status_code == 200
    assert len(rooms_response.json()["rooms"]) == 97
    assert rooms_response.json()["last_booking"] is None

    book_response = client.post("/book", json={"number_of_rooms": 3})
    assert book_response.status_code == 200
    body = book_response.json()
    assert body["success"] is True
    assert body["allocated_rooms"] == [101, 102, 103]
    assert body["travel_time"] == 2

    state = client.get("/rooms").json()
    assert state["last_booking"] == [101, 102, 103]
    assert state["last_travel_time"] == 2
    statuses = {room["room_number"]: room["status"] for room in state["rooms"]}
    assert statuses[101] == "booked"
    assert statuses[104] == "available"

    stats = client.get("/stats").json()
    assert stats == {
        "total_rooms": 97,
        "available_count": 94,
        "booked_count": 3,
        "occupied_count": 0,
    }

    available = client.get("/rooms/available").json()["available_rooms"]
    assert available[0] == 104
    assert len(available) == 94

    reset_response = client.post("/reset")
    assert reset_response.status_code == 200
    assert service.stats().available_count == 97


def test_book_rejects_out_of_range_counts() -> None:
    app, service = _build_test_app()
    client = TestClient(app)

    too_many = client.post("/book", json={"number_of_rooms": 6})
    too_few = client.post("/book", json={"number_of_rooms": 0})
    fractional = client.post("/book", json={"number_of_rooms": 2.5})

    assert too_many.status_code == 400
    assert "Maximum 5" in too_many.json()["detail"]
    assert too_few.status_code == 400
    assert "Minimum 1" in too_few.json()["detail"]
    assert fractional.status_code == 400
    assert "integer" in fractional.json()["detail"]
    assert service.stats().booked_count == 0


def test_book_rejects_when_hotel_is_full() -> None:
    app, service = _build_test_app()
    service.randomly_occupy(1.0)
    client = TestClient(app)

    response = client.post("/book", json={"number_of_rooms": 1})

    assert response.status_code == 400
    assert "Not enough rooms available" in response.json()["detail"]


def test_allocate_preview_with_explicit_rooms() -> None:
    app, service = _build_test_app()
    client = TestClient(app)

    response = client.post(
        "/allocate",
        json={"number_of_rooms": 2, "available_rooms": [101, 510, 1007]},
    )

    assert response.status_code == 200
    assert response.json()["allocated_rooms"] == [510, 1007]
    assert response.json()["travel_time"] == 13
    assert service.stats().booked_count == 0


def test_allocate_preview_uses_live_availability() -> None:
    app, service = _build_test_app()
    service.book(5)
    client = TestClient(app)

    response = client.post("/allocate", json={"number_of_rooms": 2})

    assert response.status_code == 200
    assert response.json()["allocated_rooms"] == [106, 107]
    assert service.stats().booked_count == 5


def test_random_occupancy_endpoint() -> None:
    app, _ = _build_test_app()
    client = TestClient(app)

    response = client.post("/random_occupancy", json={"occupancy_rate": 0.5})
    invalid = client.post("/random_occupancy", json={"occupancy_rate": 1.5})

    assert response.status_code == 200
    statuses = {room["status"] for room in response.json()["rooms"]}
    assert "booked" not in statuses
    assert "occupied" in statuses
    assert invalid.status_code == 422


def test_travel_time_endpoint() -> None:
    app, _ = _build_test_app()
    client = TestClient(app)

    response = client.get("/travel_time", params={"from_room": 510, "to_room": 1007})
    invalid = client.get("/travel_time", params={"from_room": 101, "to_room": 1008})

    assert response.status_code == 200
    assert response.json() == {
        "from_room": 510,
        "to_room": 1007,
        "total_minutes": 13,
        "vertical_minutes": 10,
        "horizontal_minutes": 3,
    }
    assert invalid.status_code == 400
    assert "1008" in invalid.json()["detail"]


def test_missing_service_returns_503() -> None:
    app = FastAPI()
    app.include_router(router)
    client = TestClient(app)

    response = client.get("/stats")

    assert response.status_code == 503


def test_create_app_applies_initial_occupancy() -> None:
    from app import create_app

    settings = _build_test_settings(hotel_initial_occupancy_rate=1.0)
    application = create_app(settings)

    with TestClient(application) as client:
        stats = client.get("/stats").json()

    assert stats["occupied_count"] == 97
    assert stats["available_count"] == 0
