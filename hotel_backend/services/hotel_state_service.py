"""Hotel room state: immutable transitions plus a lock-guarded holder."""

from __future__ import annotations

import random
from collections import Counter
from threading import RLock
from typing import Iterable, Optional

from hotel_backend.domain.constraints import DEFAULT_LAYOUT, HotelLayout
from hotel_backend.domain.models import (
    AllocationResult,
    BookingOutcome,
    HotelState,
    HotelStats,
    Room,
    RoomStatus,
    TravelTimeResult,
)
from hotel_backend.domain.rooms import all_room_numbers, floor_of, position_of
from hotel_backend.domain.travel_time import travel_time
from hotel_backend.services.allocation_service import RoomAllocationService, allocate_rooms
from hotel_backend.utils.config import Settings, get_settings
from hotel_backend.utils.logger import get_logger


logger = get_logger(__name__)


class HotelStateError(Exception):
    """Base failure for hotel state operations."""


class BookingRejectedError(HotelStateError):
    """Raised when a booking request cannot be satisfied."""

    def __init__(self, result: AllocationResult) -> None:
        super().__init__(result.error_message or "Booking rejected")
        self.result = result


class InvalidRoomError(HotelStateError):
    """Raised when a travel time is requested for an unknown room."""


def create_initial_hotel_state(layout: HotelLayout = DEFAULT_LAYOUT) -> HotelState:
    rooms = {
        number: Room(
            room_number=number,
            floor=floor_of(number),
            position=position_of(number),
            status=RoomStatus.AVAILABLE,
        )
        for number in all_room_numbers(layout)
    }
    return HotelState(rooms=rooms, last_booking=None, last_travel_time=None)


def rooms_with_status(state: HotelState, status: RoomStatus) -> list[int]:
    return sorted(number for number, room in state.rooms.items() if room.status is status)


def available_rooms(state: HotelState) -> list[int]:
    return rooms_with_status(state, RoomStatus.AVAILABLE)


def booked_rooms(state: HotelState) -> list[int]:
    return rooms_with_status(state, RoomStatus.BOOKED)


def occupied_rooms(state: HotelState) -> list[int]:
    return rooms_with_status(state, RoomStatus.OCCUPIED)


def update_room_status(
    state: HotelState,
    room_numbers: Iterable[int],
    new_status: RoomStatus,
) -> HotelState:
    """Copy of ``state`` with the given rooms set to ``new_status``; unknown rooms are skipped."""
    rooms = dict(state.rooms)
    for number in room_numbers:
        existing = rooms.get(number)
        if existing is None:
            continue
        rooms[number] = Room(
            room_number=existing.room_number,
            floor=existing.floor,
            position=existing.position,
            status=new_status,
        )
    return HotelState(
        rooms=rooms,
        last_booking=state.last_booking,
        last_travel_time=state.last_travel_time,
    )


def process_booking(
    state: HotelState,
    number_of_rooms: object,
    layout: HotelLayout = DEFAULT_LAYOUT,
    allocation_service: Optional[RoomAllocationService] = None,
) -> BookingOutcome:
    """Allocate from the available rooms and mark them booked, all or nothing."""
    candidates = available_rooms(state)
    if allocation_service is not None:
        result = allocation_service.allocate(number_of_rooms, candidates)
    else:
        result = allocate_rooms(number_of_rooms, candidates, layout)
    if not result.success:
        return BookingOutcome(state=state, result=result)

    booked = update_room_status(state, result.allocated_rooms, RoomStatus.BOOKED)
    return BookingOutcome(
        state=HotelState(
            rooms=booked.rooms,
            last_booking=result.allocated_rooms,
            last_travel_time=result.travel_time,
        ),
        result=result,
    )


def reset_hotel(layout: HotelLayout = DEFAULT_LAYOUT) -> HotelState:
    return create_initial_hotel_state(layout)


def randomly_occupy_rooms(
    state: HotelState,
    occupancy_rate: float = 0.3,
    rng: Optional[random.Random] = None,
    layout: HotelLayout = DEFAULT_LAYOUT,
) -> HotelState:
    """Fresh hotel with each room occupied with probability ``occupancy_rate``.

    ``state`` is only replaced, never read: earlier bookings are cleared.
    """
    del state
    if not 0.0 <= occupancy_rate <= 1.0:
        raise ValueError("occupancy_rate must be between 0 and 1")
    source = rng or random.Random()
    fresh = reset_hotel(layout)
    to_occupy = [number for number in all_room_numbers(layout) if source.random() < occupancy_rate]
    return update_room_status(fresh, to_occupy, RoomStatus.OCCUPIED)


def hotel_stats(state: HotelState) -> HotelStats:
    counts = Counter(room.status for room in state.rooms.values())
    by_status = {status: counts.get(status, 0) for status in RoomStatus}
    return HotelStats(
        total_rooms=len(state.rooms),
        available_count=by_status[RoomStatus.AVAILABLE],
        booked_count=by_status[RoomStatus.BOOKED],
        occupied_count=by_status[RoomStatus.OCCUPIED],
    )


class HotelStateService:
    """Owns the current hotel state and serialises every transition."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        allocation_service: Optional[RoomAllocationService] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._allocation_service = allocation_service or RoomAllocationService(settings=self._settings)
        self._layout = self._allocation_service.layout
        self._rng = rng or random.Random(self._settings.hotel_random_seed)
        self._lock = RLock()
        self._state = create_initial_hotel_state(self._layout)

    @property
    def layout(self) -> HotelLayout:
        return self._layout

    def snapshot(self) -> HotelState:
        with self._lock:
            return self._state

    def stats(self) -> HotelStats:
        return hotel_stats(self.snapshot())

    def available_rooms(self) -> list[int]:
        return available_rooms(self.snapshot())

    def preview(
        self,
        number_of_rooms: object,
        candidate_rooms: Optional[Iterable[int]] = None,
    ) -> AllocationResult:
        """Run the allocator without committing anything."""
        rooms = list(candidate_rooms) if candidate_rooms is not None else self.available_rooms()
        return self._allocation_service.allocate(number_of_rooms, rooms)

    def book(self, number_of_rooms: object) -> AllocationResult:
        with self._lock:
            outcome = process_booking(
                self._state,
                number_of_rooms,
                self._layout,
                allocation_service=self._allocation_service,
            )
            if not outcome.result.success:
                raise BookingRejectedError(outcome.result)
            self._state = outcome.state
        logger.info(
            "Booking committed | rooms=%s | travel_time=%s",
            list(outcome.result.allocated_rooms),
            outcome.result.travel_time,
        )
        return outcome.result

    def reset(self) -> HotelState:
        with self._lock:
            self._state = reset_hotel(self._layout)
            logger.info("Hotel reset | rooms=%s", len(self._state.rooms))
            return self._state

    def randomly_occupy(self, occupancy_rate: float) -> HotelState:
        with self._lock:
            self._state = randomly_occupy_rooms(
                self._state,
                occupancy_rate=occupancy_rate,
                rng=self._rng,
                layout=self._layout,
            )
            stats = hotel_stats(self._state)
            logger.info(
                "Random occupancy applied | rate=%.2f | occupied=%s | available=%s",
                occupancy_rate,
                stats.occupied_count,
                stats.available_count,
            )
            return self._state

    def travel_time(self, from_room: int, to_room: int) -> TravelTimeResult:
        result = travel_time(from_room, to_room, self._layout)
        if not result.is_valid:
            raise InvalidRoomError(result.error_message)
        return result
