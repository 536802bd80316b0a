"""
app.py - FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the allocation and hotel state services and registers the router.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from hotel_backend.controllers.booking_controller import router as booking_router
from hotel_backend.services.allocation_service import RoomAllocationService
from hotel_backend.services.hotel_state_service import HotelStateService
from hotel_backend.utils.config import Settings, get_settings
from hotel_backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services are created here and stored on app.state; controllers resolve
    them from there, so tests can swap either one.
    """
    settings = settings or get_settings()

    # --- Services (layout validated on construction) ---
    allocation_service = RoomAllocationService(settings=settings)
    hotel_state_service = HotelStateService(
        settings=settings,
        allocation_service=allocation_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app, settings)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(booking_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.allocation_service = allocation_service
    app.state.hotel_state_service = hotel_state_service

    return app


def _startup(app: FastAPI, settings: Settings) -> None:
    """Log the layout and apply the configured initial occupancy, if any."""
    hotel_state_service: HotelStateService = app.state.hotel_state_service
    layout = hotel_state_service.layout

    logger.info(
        "Startup: hotel layout | floors=%s | rooms=%s | booking_limits=%s-%s",
        layout.total_floors,
        hotel_state_service.stats().total_rooms,
        layout.min_rooms_per_booking,
        layout.max_rooms_per_booking,
    )

    if settings.hotel_initial_occupancy_rate > 0.0:
        logger.info(
            "Startup: applying initial occupancy rate %.2f",
            settings.hotel_initial_occupancy_rate,
        )
        hotel_state_service.randomly_occupy(settings.hotel_initial_occupancy_rate)

    logger.info("Startup complete - system ready")


# Module-level app object for uvicorn
app = create_app()
