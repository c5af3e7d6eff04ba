# roomshare/routes/v1/bookings.py
"""
Single booking routes - API v1

Versioned booking endpoints under /api/v1/bookings.
All business logic delegated to BookingService.

Endpoints:
    GET /history - Bookings of the caller (or the user an admin acts as)
    POST / - Create a single booking
    GET /{booking_id} - Booking details
    PATCH /{booking_id} - Edit title/notes
    POST /{booking_id}/cancel - Cancel a booking
"""

import asyncio
import logging
from typing import List, NoReturn

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.params import Path

from ...api.dependencies import get_booking_service, get_current_principal
from ...core.exceptions import DomainException
from ...principal import CallerPrincipal
from ...schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["bookings-v1"])

ULID_PATH_PATTERN = r"^[0-9A-HJKMNP-TV-Z]{26}$"


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/history", response_model=List[BookingResponse])
async def get_booking_history(
    principal: CallerPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    """All bookings of the effective user, newest first, cancelled included."""
    try:
        bookings = await asyncio.to_thread(booking_service.get_booking_history, principal)
        return [BookingResponse.from_booking(booking) for booking in bookings]
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Time conflict"}, 422: {"description": "Booking rule violated"}},
)
async def create_booking(
    booking_data: BookingCreate = Body(...),
    principal: CallerPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Create a single booking for the caller."""
    try:
        booking = await asyncio.to_thread(
            booking_service.create_booking,
            principal,
            room_id=booking_data.room_id,
            title=booking_data.title,
            notes=booking_data.notes,
            start=booking_data.start_time,
            end=booking_data.end_time,
        )
        return BookingResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    responses={404: {"description": "Booking not found"}},
)
async def get_booking(
    booking_id: str = Path(..., description="Booking ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        booking = await asyncio.to_thread(booking_service.get_booking, booking_id)
        return BookingResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    responses={404: {"description": "Booking not found"}},
)
async def edit_booking(
    booking_id: str = Path(..., description="Booking ULID", pattern=ULID_PATH_PATTERN),
    update_data: BookingUpdate = Body(...),
    principal: CallerPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Edit title and notes (owner or admin, before the booking starts)."""
    try:
        booking = await asyncio.to_thread(
            booking_service.edit_booking,
            booking_id,
            principal,
            title=update_data.title,
            notes=update_data.notes,
        )
        return BookingResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{booking_id}/cancel",
    response_model=BookingResponse,
    responses={404: {"description": "Booking not found"}},
)
async def cancel_booking(
    booking_id: str = Path(..., description="Booking ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    """Cancel a booking (owner or admin, before the booking starts)."""
    try:
        booking = await asyncio.to_thread(booking_service.cancel_booking, booking_id, principal)
        return BookingResponse.from_booking(booking)
    except DomainException as e:
        handle_domain_exception(e)
