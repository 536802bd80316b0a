"""HTTP controller layer for room booking and travel time queries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from hotel_backend.controllers.dependencies import get_allocation_service, get_hotel_state_service
from hotel_backend.domain.models import AllocationResult, HotelState, RoomStatus
from hotel_backend.services.allocation_service import RoomAllocationService
from hotel_backend.services.hotel_state_service import (
    BookingRejectedError,
    HotelStateService,
    InvalidRoomError,
)
from hotel_backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["booking"])


class BookingRequest(BaseModel):
    """Room count is range-checked by the allocator so its message reaches the client."""

    number_of_rooms: int | float


class AllocationPreviewRequest(BaseModel):
    number_of_rooms: int | float
    available_rooms: list[int] | None = None


class RandomOccupancyRequest(BaseModel):
    occupancy_rate: float = Field(default=0.3, ge=0.0, le=1.0)


class AllocationResponse(BaseModel):
    success: bool
    allocated_rooms: list[int]
    travel_time: int = Field(ge=0)
    message: str


class RoomResponse(BaseModel):
    room_number: int = Field(gt=0)
    floor: int = Field(ge=1)
    position: int = Field(ge=1)
    status: RoomStatus


class HotelStateResponse(BaseModel):
    rooms: list[RoomResponse]
    last_booking: list[int] | None
    last_travel_time: int | None


class AvailableRoomsResponse(BaseModel):
    available_rooms: list[int]


class HotelStatsResponse(BaseModel):
    total_rooms: int = Field(ge=0)
    available_count: int = Field(ge=0)
    booked_count: int = Field(ge=0)
    occupied_count: int = Field(ge=0)


class TravelTimeResponse(BaseModel):
    from_room: int
    to_room: int
    total_minutes: int = Field(ge=0)
    vertical_minutes: int = Field(ge=0)
    horizontal_minutes: int = Field(ge=0)


def _allocation_response(result: AllocationResult) -> AllocationResponse:
    rooms = list(result.allocated_rooms)
    return AllocationResponse(
        success=True,
        allocated_rooms=rooms,
        travel_time=result.travel_time,
        message=f"Allocated rooms {', '.join(str(room) for room in rooms)}",
    )


def _state_response(state: HotelState) -> HotelStateResponse:
    return HotelStateResponse(
        rooms=[
            RoomResponse(
                room_number=room.room_number,
                floor=room.floor,
                position=room.position,
                status=room.status,
            )
            for _, room in sorted(state.rooms.items())
        ],
        last_booking=list(state.last_booking) if state.last_booking is not None else None,
        last_travel_time=state.last_travel_time,
    )


def _reject(result: AllocationResult) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=result.error_message or "Unable to allocate rooms",
    )


@router.get("/rooms", response_model=HotelStateResponse)
async def list_rooms(
    service: HotelStateService = Depends(get_hotel_state_service),
) -> HotelStateResponse:
    return _state_response(service.snapshot())


@router.get("/rooms/available", response_model=AvailableRoomsResponse)
async def list_available_rooms(
    service: HotelStateService = Depends(get_hotel_state_service),
) -> AvailableRoomsResponse:
    return AvailableRoomsResponse(available_rooms=service.available_rooms())


@router.get("/stats", response_model=HotelStatsResponse)
async def get_stats(
    service: HotelStateService = Depends(get_hotel_state_service),
) -> HotelStatsResponse:
    stats = service.stats()
    return HotelStatsResponse(
        total_rooms=stats.total_rooms,
        available_count=stats.available_count,
        booked_count=stats.booked_count,
        occupied_count=stats.occupied_count,
    )


@router.post("/book", response_model=AllocationResponse, status_code=status.HTTP_200_OK)
async def book_rooms(
    payload: BookingRequest,
    service: HotelStateService = Depends(get_hotel_state_service),
) -> AllocationResponse:
    """Allocate and commit rooms against the live hotel state."""
    try:
        result = service.book(payload.number_of_rooms)
        return _allocation_response(result)
    except BookingRejectedError as exc:
        raise _reject(exc.result) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to book rooms",
        ) from exc


@router.post("/allocate", response_model=AllocationResponse, status_code=status.HTTP_200_OK)
async def preview_allocation(
    payload: AllocationPreviewRequest,
    state_service: HotelStateService = Depends(get_hotel_state_service),
    allocation_service: RoomAllocationService = Depends(get_allocation_service),
) -> AllocationResponse:
    """Dry run: report which rooms would be chosen without booking them."""
    try:
        if payload.available_rooms is not None:
            result = allocation_service.allocate(payload.number_of_rooms, payload.available_rooms)
        else:
            result = state_service.preview(payload.number_of_rooms)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected allocation preview failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute allocation",
        ) from exc
    if not result.success:
        raise _reject(result)
    return _allocation_response(result)


@router.post("/reset", response_model=HotelStateResponse)
async def reset_hotel(
    service: HotelStateService = Depends(get_hotel_state_service),
) -> HotelStateResponse:
    return _state_response(service.reset())


@router.post("/random_occupancy", response_model=HotelStateResponse)
async def random_occupancy(
    payload: RandomOccupancyRequest,
    service: HotelStateService = Depends(get_hotel_state_service),
) -> HotelStateResponse:
    return _state_response(service.randomly_occupy(payload.occupancy_rate))


@router.get("/travel_time", response_model=TravelTimeResponse)
async def get_travel_time(
    from_room: int = Query(...),
    to_room: int = Query(...),
    service: HotelStateService = Depends(get_hotel_state_service),
) -> TravelTimeResponse:
    try:
        result = service.travel_time(from_room, to_room)
    except InvalidRoomError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return TravelTimeResponse(
        from_room=from_room,
        to_room=to_room,
        total_minutes=result.total_minutes,
        vertical_minutes=result.vertical_minutes,
        horizontal_minutes=result.horizontal_minutes,
    )
