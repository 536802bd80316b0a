"""Room number addressing.

A room number encodes ``floor * 100 + position`` with a 1-indexed position,
so ``101`` is the first room on floor 1 and ``1007`` the last room on
floor 10. Sorting room numbers as integers is the same as sorting by floor
then position.
"""

from __future__ import annotations

from typing import Iterable

from hotel_backend.domain.constraints import DEFAULT_LAYOUT, HotelLayout


def floor_of(room_number: int) -> int:
    return room_number // 100


def position_of(room_number: int) -> int:
    return room_number % 100


def make_room_number(floor: int, position: int) -> int:
    return floor * 100 + position


def rooms_count_for_floor(floor: int, layout: HotelLayout = DEFAULT_LAYOUT) -> int:
    if floor < 1 or floor > layout.total_floors:
        return 0
    if floor == layout.top_floor:
        return layout.top_floor_rooms
    return layout.standard_rooms_per_floor


def is_valid_room_number(room_number: object, layout: HotelLayout = DEFAULT_LAYOUT) -> bool:
    if isinstance(room_number, bool) or not isinstance(room_number, int):
        return False
    if room_number < 100:
        return False
    floor = floor_of(room_number)
    if floor < 1 or floor > layout.total_floors:
        return False
    position = position_of(room_number)
    return 1 <= position <= rooms_count_for_floor(floor, layout)


def rooms_on_floor(floor: int, layout: HotelLayout = DEFAULT_LAYOUT) -> list[int]:
    return [
        make_room_number(floor, position)
        for position in range(1, rooms_count_for_floor(floor, layout) + 1)
    ]


def all_room_numbers(layout: HotelLayout = DEFAULT_LAYOUT) -> list[int]:
    """Every valid room number, floor-major then position-minor."""
    numbers: list[int] = []
    for floor in range(1, layout.total_floors + 1):
        numbers.extend(rooms_on_floor(floor, layout))
    return numbers


def total_room_count(layout: HotelLayout = DEFAULT_LAYOUT) -> int:
    return (layout.total_floors - 1) * layout.standard_rooms_per_floor + layout.top_floor_rooms


def sort_room_numbers(room_numbers: Iterable[int]) -> list[int]:
    return sorted(room_numbers, key=lambda number: (floor_of(number), position_of(number)))
