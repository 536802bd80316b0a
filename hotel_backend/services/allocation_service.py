"""Room allocation engine.

Strategy, in priority order:

1. Place the whole booking on one floor. Each floor offers its best block
   of consecutive rooms; failing that, its tightest window of available
   rooms. The floor with the smallest span wins, lower floors on ties.
2. Only when no floor has enough rooms, pick the cross-floor combination
   with the smallest span.

A single-floor block always beats a cross-floor combination, even one with
a smaller span. Ties on span go to the block whose lowest room number is
smaller. All functions are pure: the caller's room collection is never
modified.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from hotel_backend.domain.constraints import DEFAULT_LAYOUT, HotelLayout, layout_from_settings
from hotel_backend.domain.models import AllocationErrorCode, AllocationResult
from hotel_backend.domain.rooms import floor_of, is_valid_room_number, position_of, sort_room_numbers
from hotel_backend.domain.travel_time import group_span, travel_time
from hotel_backend.utils.config import Settings, get_settings
from hotel_backend.utils.logger import get_logger


logger = get_logger(__name__)


def _as_room_count(value: object) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _rejected(code: AllocationErrorCode, message: str) -> AllocationResult:
    return AllocationResult(
        success=False,
        allocated_rooms=(),
        travel_time=0,
        error_message=message,
        error_code=code,
    )


def usable_rooms(available_rooms: Iterable[int], layout: HotelLayout = DEFAULT_LAYOUT) -> list[int]:
    """Distinct valid room numbers in ascending order."""
    return sort_room_numbers(
        {room for room in available_rooms if is_valid_room_number(room, layout)}
    )


def validate_booking_request(
    requested_rooms: object,
    available_count: int,
    layout: HotelLayout = DEFAULT_LAYOUT,
) -> Optional[AllocationResult]:
    """Return a rejection for the first rule the request breaks, else ``None``."""
    count = _as_room_count(requested_rooms)
    if count is None:
        return _rejected(
            AllocationErrorCode.INVALID_COUNT,
            "Number of rooms must be an integer",
        )
    if count < layout.min_rooms_per_booking:
        return _rejected(
            AllocationErrorCode.BELOW_MINIMUM,
            f"Minimum {layout.min_rooms_per_booking} room(s) required per booking",
        )
    if count > layout.max_rooms_per_booking:
        return _rejected(
            AllocationErrorCode.ABOVE_MAXIMUM,
            f"Maximum {layout.max_rooms_per_booking} rooms allowed per booking",
        )
    if available_count < count:
        return _rejected(
            AllocationErrorCode.INSUFFICIENT_AVAILABILITY,
            f"Not enough rooms available. Requested: {count}, Available: {available_count}",
        )
    return None


def group_rooms_by_floor(room_numbers: Iterable[int]) -> dict[int, list[int]]:
    rooms_by_floor: dict[int, list[int]] = defaultdict(list)
    for room in room_numbers:
        rooms_by_floor[floor_of(room)].append(room)
    for floor_rooms in rooms_by_floor.values():
        floor_rooms.sort(key=position_of)
    return dict(rooms_by_floor)


def _tightest(
    candidates: Iterable[Sequence[int]],
    layout: HotelLayout,
) -> Optional[list[int]]:
    best: Optional[list[int]] = None
    best_key: Optional[tuple[float, int]] = None
    for block in candidates:
        key = (group_span(block, layout), block[0])
        if best_key is None or key < best_key:
            best = list(block)
            best_key = key
    return best


def _windows(sorted_rooms: Sequence[int], count: int) -> Iterable[Sequence[int]]:
    for start in range(len(sorted_rooms) - count + 1):
        yield sorted_rooms[start:start + count]


def _is_consecutive(block: Sequence[int]) -> bool:
    return all(
        position_of(block[index]) - position_of(block[index - 1]) == 1
        for index in range(1, len(block))
    )


def find_best_contiguous_block(
    floor_rooms: Sequence[int],
    count: int,
    layout: HotelLayout = DEFAULT_LAYOUT,
) -> Optional[list[int]]:
    """Tightest run of ``count`` rooms with consecutive positions, if any."""
    if len(floor_rooms) < count:
        return None
    ordered = sorted(floor_rooms, key=position_of)
    return _tightest(
        (block for block in _windows(ordered, count) if _is_consecutive(block)),
        layout,
    )


def find_best_subset(
    sorted_rooms: Sequence[int],
    count: int,
    layout: HotelLayout = DEFAULT_LAYOUT,
) -> Optional[list[int]]:
    """Minimum-span ``count``-subset of ``sorted_rooms``.

    Equivalent to scanning every combination in lexicographic order and
    keeping the first one with the lowest ``(span, lowest room)``, but only
    visits endpoint pairs: a subset's span depends on its lowest and highest
    member, and for fixed endpoints the lexicographically first subset takes
    the rooms right after the lowest one.
    """
    total = len(sorted_rooms)
    if count < 1 or total < count:
        return None

    best_pair: Optional[tuple[int, int]] = None
    best_key: Optional[tuple[int, int]] = None
    for low in range(total - count + 1):
        for high in range(low + count - 1, total):
            minutes = travel_time(sorted_rooms[low], sorted_rooms[high], layout).total_minutes
            key = (minutes, sorted_rooms[low])
            if best_key is None or key < best_key:
                best_key = key
                best_pair = (low, high)

    low, high = best_pair
    if count == 1:
        return [sorted_rooms[low]]
    return [*sorted_rooms[low:low + count - 1], sorted_rooms[high]]


def find_best_same_floor_block(
    floor_rooms: Sequence[int],
    count: int,
    layout: HotelLayout = DEFAULT_LAYOUT,
    exhaustive: bool = False,
) -> Optional[list[int]]:
    """Best block on one floor: consecutive rooms first, then the tightest spread.

    Without ``exhaustive`` the spread fallback only slides a window over the
    floor's sorted rooms; with it every ``count``-subset is considered.
    """
    if len(floor_rooms) < count:
        return None

    contiguous = find_best_contiguous_block(floor_rooms, count, layout)
    if contiguous is not None:
        return contiguous

    ordered = sorted(floor_rooms, key=position_of)
    if exhaustive:
        return find_best_subset(ordered, count, layout)
    return _tightest(_windows(ordered, count), layout)


def find_best_cross_floor_allocation(
    available_rooms: Sequence[int],
    count: int,
    layout: HotelLayout = DEFAULT_LAYOUT,
) -> Optional[list[int]]:
    if len(available_rooms) < count:
        return None
    return find_best_subset(sort_room_numbers(available_rooms), count, layout)


def allocate_rooms(
    requested_rooms: object,
    available_rooms: Iterable[int],
    layout: HotelLayout = DEFAULT_LAYOUT,
    exhaustive_same_floor: bool = False,
) -> AllocationResult:
    """Choose rooms for a booking from the available room numbers.

    Duplicate and invalid room numbers are ignored before validation, so
    the availability check counts distinct bookable rooms. Expected input
    problems come back as a failed result, never as an exception.
    """
    candidates = usable_rooms(available_rooms, layout)
    rejection = validate_booking_request(requested_rooms, len(candidates), layout)
    if rejection is not None:
        return rejection
    count = _as_room_count(requested_rooms)

    rooms_by_floor = group_rooms_by_floor(candidates)
    best_block: Optional[list[int]] = None
    best_span: Optional[float] = None
    for floor in range(1, layout.total_floors + 1):
        floor_rooms = rooms_by_floor.get(floor, [])
        if len(floor_rooms) < count:
            continue
        block = find_best_same_floor_block(
            floor_rooms,
            count,
            layout,
            exhaustive=exhaustive_same_floor,
        )
        if block is None:
            continue
        span = group_span(block, layout)
        if best_span is None or span < best_span:
            best_block = block
            best_span = span

    if best_block is not None:
        return AllocationResult(
            success=True,
            allocated_rooms=tuple(sort_room_numbers(best_block)),
            travel_time=int(best_span),
        )

    cross_floor = find_best_cross_floor_allocation(candidates, count, layout)
    if cross_floor is None:
        return _rejected(AllocationErrorCode.UNALLOCATABLE, "Unable to allocate rooms")
    return AllocationResult(
        success=True,
        allocated_rooms=tuple(sort_room_numbers(cross_floor)),
        travel_time=int(group_span(cross_floor, layout)),
    )


def can_allocate(
    requested_rooms: object,
    available_rooms: Iterable[int],
    layout: HotelLayout = DEFAULT_LAYOUT,
    exhaustive_same_floor: bool = False,
) -> bool:
    return allocate_rooms(
        requested_rooms,
        available_rooms,
        layout,
        exhaustive_same_floor=exhaustive_same_floor,
    ).success


class RoomAllocationService:
    """Settings-aware entry point to the allocation engine."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._layout = layout_from_settings(self._settings)
        self._exhaustive_same_floor = self._settings.allocation_exhaustive_same_floor

    @property
    def layout(self) -> HotelLayout:
        return self._layout

    def allocate(self, requested_rooms: object, available_rooms: Iterable[int]) -> AllocationResult:
        rooms = list(available_rooms)
        result = allocate_rooms(
            requested_rooms,
            rooms,
            self._layout,
            exhaustive_same_floor=self._exhaustive_same_floor,
        )
        if not result.success:
            logger.info(
                "Allocation rejected | requested=%s | available=%s | code=%s | reason=%s",
                requested_rooms,
                len(rooms),
                result.error_code.value if result.error_code else None,
                result.error_message,
            )
            return result

        floors = sorted({floor_of(room) for room in result.allocated_rooms})
        logger.info(
            "Allocation completed | requested=%s | rooms=%s | travel_time=%s | floors=%s",
            requested_rooms,
            list(result.allocated_rooms),
            result.travel_time,
            floors,
        )
        logger.debug(
            "Allocation search | available=%s | exhaustive_same_floor=%s",
            len(rooms),
            self._exhaustive_same_floor,
        )
        return result

    def can_allocate(self, requested_rooms: object, available_rooms: Iterable[int]) -> bool:
        return allocate_rooms(
            requested_rooms,
            available_rooms,
            self._layout,
            exhaustive_same_floor=self._exhaustive_same_floor,
        ).success
