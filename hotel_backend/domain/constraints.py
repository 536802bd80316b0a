"""Hotel layout and booking limits, with validation."""

from __future__ import annotations

from dataclasses import dataclass

from hotel_backend.utils.config import Settings


@dataclass(frozen=True)
class HotelLayout:
    """Physical shape of the hotel and the per-booking room limits.

    Floors ``1..total_floors - 1`` hold ``standard_rooms_per_floor`` rooms and
    the top floor holds ``top_floor_rooms``. Room ids encode
    ``floor * 100 + position``, so no floor may exceed 99 rooms.
    """

    total_floors: int = 10
    standard_rooms_per_floor: int = 10
    top_floor_rooms: int = 7
    horizontal_minutes_per_room: int = 1
    vertical_minutes_per_floor: int = 2
    min_rooms_per_booking: int = 1
    max_rooms_per_booking: int = 5

    @property
    def top_floor(self) -> int:
        return self.total_floors


DEFAULT_LAYOUT = HotelLayout()


def validate_hotel_layout(layout: HotelLayout) -> None:
    if layout.total_floors < 1:
        raise ValueError("total_floors must be >= 1")
    if not 1 <= layout.standard_rooms_per_floor <= 99:
        raise ValueError("standard_rooms_per_floor must be between 1 and 99")
    if not 1 <= layout.top_floor_rooms <= 99:
        raise ValueError("top_floor_rooms must be between 1 and 99")
    if layout.horizontal_minutes_per_room < 0:
        raise ValueError("horizontal_minutes_per_room must be >= 0")
    if layout.vertical_minutes_per_floor < 0:
        raise ValueError("vertical_minutes_per_floor must be >= 0")
    if layout.min_rooms_per_booking < 1:
        raise ValueError("min_rooms_per_booking must be >= 1")
    if layout.max_rooms_per_booking < layout.min_rooms_per_booking:
        raise ValueError("max_rooms_per_booking must be >= min_rooms_per_booking")


def layout_from_settings(settings: Settings) -> HotelLayout:
    layout = HotelLayout(
        total_floors=settings.hotel_total_floors,
        standard_rooms_per_floor=settings.hotel_standard_rooms_per_floor,
        top_floor_rooms=settings.hotel_top_floor_rooms,
        horizontal_minutes_per_room=settings.hotel_horizontal_minutes_per_room,
        vertical_minutes_per_floor=settings.hotel_vertical_minutes_per_floor,
        min_rooms_per_booking=settings.booking_min_rooms,
        max_rooms_per_booking=settings.booking_max_rooms,
    )
    validate_hotel_layout(layout)
    return layout
