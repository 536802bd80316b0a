"""Domain value types for room addressing, travel time and allocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    OCCUPIED = "occupied"


class AllocationErrorCode(str, Enum):
    INVALID_COUNT = "invalid_count"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    INSUFFICIENT_AVAILABILITY = "insufficient_availability"
    INVALID_ROOM = "invalid_room"
    UNALLOCATABLE = "unallocatable"


@dataclass(frozen=True)
class Room:
    room_number: int
    floor: int
    position: int
    status: RoomStatus = RoomStatus.AVAILABLE


@dataclass(frozen=True)
class HotelState:
    """Snapshot of every room; transitions build a new snapshot."""

    rooms: Mapping[int, Room]
    last_booking: Optional[tuple[int, ...]] = None
    last_travel_time: Optional[int] = None


@dataclass(frozen=True)
class TravelTimeResult:
    total_minutes: int
    vertical_minutes: int
    horizontal_minutes: int
    is_valid: bool
    error_message: Optional[str] = None


@dataclass(frozen=True)
class AllocationResult:
    success: bool
    allocated_rooms: tuple[int, ...] = field(default_factory=tuple)
    travel_time: int = 0
    error_message: Optional[str] = None
    error_code: Optional[AllocationErrorCode] = None


@dataclass(frozen=True)
class HotelStats:
    total_rooms: int
    available_count: int
    booked_count: int
    occupied_count: int


@dataclass(frozen=True)
class BookingOutcome:
    state: HotelState
    result: AllocationResult
