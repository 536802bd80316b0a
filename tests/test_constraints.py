"""Tests for hotel layout validation and settings loading.

Covers every validation branch in validate_hotel_layout().
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from hotel_backend.domain.constraints import (
    DEFAULT_LAYOUT,
    HotelLayout,
    layout_from_settings,
    validate_hotel_layout,
)
from hotel_backend.utils.config import get_settings


def valid_layout(**overrides) -> HotelLayout:
    """Return the default layout, optionally overriding fields."""
    return replace(DEFAULT_LAYOUT, **overrides)


# --- Baseline pass ---

def test_default_layout_passes() -> None:
    validate_hotel_layout(valid_layout())


def test_default_layout_matches_hotel_shape() -> None:
    assert DEFAULT_LAYOUT.total_floors == 10
    assert DEFAULT_LAYOUT.top_floor == 10
    assert DEFAULT_LAYOUT.standard_rooms_per_floor == 10
    assert DEFAULT_LAYOUT.top_floor_rooms == 7
    assert DEFAULT_LAYOUT.horizontal_minutes_per_room == 1
    assert DEFAULT_LAYOUT.vertical_minutes_per_floor == 2
    assert DEFAULT_LAYOUT.min_rooms_per_booking == 1
    assert DEFAULT_LAYOUT.max_rooms_per_booking == 5


# --- Failing branches ---

@pytest.mark.parametrize(
    "overrides",
    [
        {"total_floors": 0},
        {"standard_rooms_per_floor": 0},
        {"standard_rooms_per_floor": 100},
        {"top_floor_rooms": 0},
        {"top_floor_rooms": 100},
        {"horizontal_minutes_per_room": -1},
        {"vertical_minutes_per_floor": -1},
        {"min_rooms_per_booking": 0},
        {"min_rooms_per_booking": 3, "max_rooms_per_booking": 2},
    ],
)
def test_invalid_layout_raises(overrides) -> None:
    with pytest.raises(ValueError):
        validate_hotel_layout(valid_layout(**overrides))


# --- Boundary values ---

def test_ninety_nine_rooms_per_floor_passes() -> None:
    """Largest floor the three-digit position encoding allows."""
    validate_hotel_layout(valid_layout(standard_rooms_per_floor=99, top_floor_rooms=99))


def test_free_travel_passes() -> None:
    validate_hotel_layout(valid_layout(horizontal_minutes_per_room=0, vertical_minutes_per_floor=0))


def test_single_room_bookings_pass() -> None:
    validate_hotel_layout(valid_layout(min_rooms_per_booking=1, max_rooms_per_booking=1))


# --- Settings ---

def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("HOTEL_TOTAL_FLOORS", "4")
    monkeypatch.setenv("BOOKING_MAX_ROOMS", "3")
    monkeypatch.setenv("ALLOCATION_EXHAUSTIVE_SAME_FLOOR", "true")
    monkeypatch.setenv("HOTEL_RANDOM_SEED", "42")
    get_settings.cache_clear()
    try:
        settings = get_settings()
        layout = layout_from_settings(settings)
    finally:
        get_settings.cache_clear()

    assert layout.total_floors == 4
    assert layout.max_rooms_per_booking == 3
    assert settings.allocation_exhaustive_same_floor is True
    assert settings.hotel_random_seed == 42


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "HOTEL_TOTAL_FLOORS",
        "HOTEL_STANDARD_ROOMS_PER_FLOOR",
        "HOTEL_TOP_FLOOR_ROOMS",
        "HOTEL_HORIZONTAL_MINUTES_PER_ROOM",
        "HOTEL_VERTICAL_MINUTES_PER_FLOOR",
        "BOOKING_MIN_ROOMS",
        "BOOKING_MAX_ROOMS",
        "ALLOCATION_EXHAUSTIVE_SAME_FLOOR",
        "HOTEL_RANDOM_SEED",
        "HOTEL_INITIAL_OCCUPANCY_RATE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert layout_from_settings(settings) == DEFAULT_LAYOUT
    assert settings.allocation_exhaustive_same_floor is False
    assert settings.hotel_random_seed is None
    assert settings.hotel_initial_occupancy_rate == 0.0
