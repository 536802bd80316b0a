"""Runtime settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str

    hotel_total_floors: int
    hotel_standard_rooms_per_floor: int
    hotel_top_floor_rooms: int
    hotel_horizontal_minutes_per_room: int
    hotel_vertical_minutes_per_floor: int
    booking_min_rooms: int
    booking_max_rooms: int

    allocation_exhaustive_same_floor: bool

    hotel_initial_occupancy_rate: float
    hotel_random_seed: Optional[int]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process; call ``get_settings.cache_clear()`` to reload."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Hotel Room Reservation Service"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        hotel_total_floors=_env_int("HOTEL_TOTAL_FLOORS", 10),
        hotel_standard_rooms_per_floor=_env_int("HOTEL_STANDARD_ROOMS_PER_FLOOR", 10),
        hotel_top_floor_rooms=_env_int("HOTEL_TOP_FLOOR_ROOMS", 7),
        hotel_horizontal_minutes_per_room=_env_int("HOTEL_HORIZONTAL_MINUTES_PER_ROOM", 1),
        hotel_vertical_minutes_per_floor=_env_int("HOTEL_VERTICAL_MINUTES_PER_FLOOR", 2),
        booking_min_rooms=_env_int("BOOKING_MIN_ROOMS", 1),
        booking_max_rooms=_env_int("BOOKING_MAX_ROOMS", 5),
        allocation_exhaustive_same_floor=_env_bool("ALLOCATION_EXHAUSTIVE_SAME_FLOOR", False),
        hotel_initial_occupancy_rate=_env_float("HOTEL_INITIAL_OCCUPANCY_RATE", 0.0),
        hotel_random_seed=_env_optional_int("HOTEL_RANDOM_SEED"),
    )
