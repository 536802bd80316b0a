"""Travel time between rooms.

Moving one room along a corridor costs ``horizontal_minutes_per_room`` and
moving one floor costs ``vertical_minutes_per_floor``; a cross-floor walk
is the sum of both components. The span of a group of rooms is the walk
between its lowest and highest room number, which is the quantity the
allocator minimizes.
"""

from __future__ import annotations

import math
from typing import Sequence

from hotel_backend.domain.constraints import DEFAULT_LAYOUT, HotelLayout
from hotel_backend.domain.models import TravelTimeResult
from hotel_backend.domain.rooms import floor_of, is_valid_room_number, position_of


INVALID_SPAN = math.inf

_ZERO_RESULT = TravelTimeResult(
    total_minutes=0,
    vertical_minutes=0,
    horizontal_minutes=0,
    is_valid=True,
)


def _invalid_result(room_number: object) -> TravelTimeResult:
    return TravelTimeResult(
        total_minutes=0,
        vertical_minutes=0,
        horizontal_minutes=0,
        is_valid=False,
        error_message=f"Invalid room number: {room_number}",
    )


def horizontal_time(position_a: int, position_b: int, layout: HotelLayout = DEFAULT_LAYOUT) -> int:
    return abs(position_a - position_b) * layout.horizontal_minutes_per_room


def vertical_time(floor_a: int, floor_b: int, layout: HotelLayout = DEFAULT_LAYOUT) -> int:
    return abs(floor_a - floor_b) * layout.vertical_minutes_per_floor


def travel_time(room_a: int, room_b: int, layout: HotelLayout = DEFAULT_LAYOUT) -> TravelTimeResult:
    if not is_valid_room_number(room_a, layout):
        return _invalid_result(room_a)
    if not is_valid_room_number(room_b, layout):
        return _invalid_result(room_b)
    if room_a == room_b:
        return _ZERO_RESULT

    vertical = vertical_time(floor_of(room_a), floor_of(room_b), layout)
    horizontal = horizontal_time(position_of(room_a), position_of(room_b), layout)
    return TravelTimeResult(
        total_minutes=vertical + horizontal,
        vertical_minutes=vertical,
        horizontal_minutes=horizontal,
        is_valid=True,
    )


def total_travel_time_for_rooms(
    room_numbers: Sequence[int],
    layout: HotelLayout = DEFAULT_LAYOUT,
) -> TravelTimeResult:
    """Breakdown of the walk from the lowest to the highest room in the group."""
    for room_number in room_numbers:
        if not is_valid_room_number(room_number, layout):
            return _invalid_result(room_number)
    if len(room_numbers) <= 1:
        return _ZERO_RESULT
    return travel_time(min(room_numbers), max(room_numbers), layout)


def group_span(room_numbers: Sequence[int], layout: HotelLayout = DEFAULT_LAYOUT) -> float:
    """Minutes between the extreme rooms, or ``INVALID_SPAN`` if any room is invalid."""
    if len(room_numbers) <= 1:
        return 0
    result = total_travel_time_for_rooms(room_numbers, layout)
    if not result.is_valid:
        return INVALID_SPAN
    return result.total_minutes
