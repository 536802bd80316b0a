"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from hotel_backend.services.allocation_service import RoomAllocationService
from hotel_backend.services.hotel_state_service import HotelStateService


def get_hotel_state_service(request: Request) -> HotelStateService:
    service = getattr(request.app.state, "hotel_state_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Hotel state service is not initialized",
        )
    return service


def get_allocation_service(request: Request) -> RoomAllocationService:
    service = getattr(request.app.state, "allocation_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Allocation service is not initialized",
        )
    return service
