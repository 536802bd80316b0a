#!/usr/bin/env python3
"""Validate local hotel reservation environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hotel_backend.domain.constraints import layout_from_settings
from hotel_backend.domain.rooms import all_room_numbers, total_room_count
from hotel_backend.services.allocation_service import RoomAllocationService
from hotel_backend.services.hotel_state_service import HotelStateService
from hotel_backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable with versions
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    from importlib.metadata import version
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            _ = version(dist_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    settings = get_settings()

    # CHECK 3: Hotel layout configuration
    try:
        layout = layout_from_settings(settings)
        room_count = len(all_room_numbers(layout))
        if room_count != total_room_count(layout):
            raise RuntimeError(f"expected {total_room_count(layout)} rooms, got {room_count}")
        ok, line = _print_result("Hotel layout", True, f": {room_count} rooms")
    except Exception as exc:
        ok, line = _print_result("Hotel layout", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Allocation smoke test
    try:
        service = RoomAllocationService(settings=settings)
        allocation = service.allocate(settings.booking_max_rooms, all_room_numbers(service.layout))
        if not allocation.success:
            raise RuntimeError(allocation.error_message)
        ok, line = _print_result(
            "Allocation engine",
            True,
            f": {list(allocation.allocated_rooms)} travel={allocation.travel_time}",
        )
    except Exception as exc:
        ok, line = _print_result("Allocation engine", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5: Booking commits against hotel state
    try:
        state_service = HotelStateService(settings=settings)
        booked = state_service.book(settings.booking_min_rooms)
        stats = state_service.stats()
        if stats.booked_count != len(booked.allocated_rooms):
            raise RuntimeError(f"expected {len(booked.allocated_rooms)} booked, got {stats.booked_count}")
        ok, line = _print_result("Hotel state booking", True, f": {stats.booked_count} booked")
    except Exception as exc:
        ok, line = _print_result("Hotel state booking", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Hotel Reservation Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
