from __future__ import annotations

import math

from hotel_backend.domain.constraints import HotelLayout
from hotel_backend.domain.travel_time import (
    INVALID_SPAN,
    group_span,
    horizontal_time,
    total_travel_time_for_rooms,
    travel_time,
    vertical_time,
)


def test_horizontal_time_is_one_minute_per_room() -> None:
    assert horizontal_time(1, 1) == 0
    assert horizontal_time(1, 5) == 4
    assert horizontal_time(10, 3) == 7


def test_vertical_time_is_two_minutes_per_floor() -> None:
    assert vertical_time(1, 1) == 0
    assert vertical_time(1, 2) == 2
    assert vertical_time(10, 1) == 18


def test_travel_time_same_floor_is_horizontal_only() -> None:
    result = travel_time(101, 105)

    assert result.is_valid
    assert result.total_minutes == 4
    assert result.vertical_minutes == 0
    assert result.horizontal_minutes == 4


def test_travel_time_cross_floor_adds_both_components() -> None:
    result = travel_time(510, 1007)

    assert result.is_valid
    assert result.vertical_minutes == 10
    assert result.horizontal_minutes == 3
    assert result.total_minutes == 13


def test_travel_time_is_symmetric() -> None:
    assert travel_time(203, 805) == travel_time(805, 203)


def test_travel_time_same_room_is_zero() -> None:
    result = travel_time(305, 305)

    assert result.is_valid
    assert result.total_minutes == 0


def test_travel_time_reports_the_invalid_room() -> None:
    first = travel_time(1008, 101)
    second = travel_time(101, 1008)

    assert not first.is_valid
    assert "1008" in first.error_message
    assert not second.is_valid
    assert "1008" in second.error_message
    assert second.total_minutes == 0


def test_total_travel_time_uses_lowest_and_highest_room() -> None:
    result = total_travel_time_for_rooms([305, 101, 203])

    assert result.is_valid
    assert result.vertical_minutes == 4
    assert result.horizontal_minutes == 4
    assert result.total_minutes == 8


def test_total_travel_time_for_empty_and_single_groups() -> None:
    assert total_travel_time_for_rooms([]).total_minutes == 0
    assert total_travel_time_for_rooms([101]).is_valid
    assert not total_travel_time_for_rooms([111]).is_valid


def test_group_span_of_small_groups_is_zero() -> None:
    assert group_span([]) == 0
    assert group_span([101]) == 0


def test_group_span_matches_extreme_rooms() -> None:
    assert group_span([101, 102, 103]) == 2
    assert group_span([101, 102, 201]) == 2
    assert group_span([101, 201, 301]) == 4


def test_group_span_with_invalid_room_is_infinite() -> None:
    span = group_span([101, 1008])

    assert span == INVALID_SPAN
    assert math.isinf(span)


def test_travel_time_respects_layout_costs() -> None:
    layout = HotelLayout(horizontal_minutes_per_room=3, vertical_minutes_per_floor=5)

    result = travel_time(101, 304, layout)

    assert result.vertical_minutes == 10
    assert result.horizontal_minutes == 9
    assert result.total_minutes == 19
