# roomshare/routes/v1/rooms.py
"""
Room routes - API v1

Endpoints under /api/v1/rooms:
    GET / - List rooms
    POST / - Create a room (admin)
    GET /{room_id} - Room details
    PATCH /{room_id} - Rename / describe a room (admin)
    POST /{room_id}/disabled - Enable or disable a room (admin)
    GET /{room_id}/occurrences - Calendar of a room between two dates
    GET /{room_id}/recurring-rules - Recurring rules of a room
    GET /{room_id}/blocked-ranges - Blocked ranges of a room
    POST /{room_id}/blocked-ranges - Block a time range (admin)
"""

import asyncio
from datetime import date, datetime
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.params import Path

from ...api.dependencies import (
    get_calendar_service,
    get_current_principal,
    get_recurring_booking_service,
    get_room_service,
    require_admin,
)
from ...core.exceptions import DomainException
from ...principal import CallerPrincipal
from ...schemas.occurrence import OccurrenceListResponse, serialize_occurrence
from ...schemas.recurring import RecurringRuleResponse
from ...schemas.room import (
    BlockedRangeCreate,
    BlockedRangeResponse,
    RoomCreate,
    RoomDisabledUpdate,
    RoomResponse,
    RoomUpdate,
)
from ...services.calendar_service import CalendarService
from ...services.recurring_booking_service import RecurringBookingService
from ...services.room_service import RoomService
from .bookings import ULID_PATH_PATTERN, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["rooms-v1"])


@router.get("", response_model=List[RoomResponse])
async def list_rooms(
    include_disabled: bool = Query(False, description="Include disabled rooms"),
    principal: CallerPrincipal = Depends(get_current_principal),
    room_service: RoomService = Depends(get_room_service),
) -> List[RoomResponse]:
    rooms = await asyncio.to_thread(room_service.list_rooms, include_disabled)
    return [RoomResponse.model_validate(room) for room in rooms]


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    principal: CallerPrincipal = Depends(require_admin),
    room_data: RoomCreate = Body(...),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        room = await asyncio.to_thread(
            room_service.create_room,
            principal,
            name=room_data.name,
            description=room_data.description,
        )
        return RoomResponse.model_validate(room)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(get_current_principal),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        room = await asyncio.to_thread(room_service.get_room, room_id)
        return RoomResponse.model_validate(room)
    except DomainException as e:
        handle_domain_exception(e)


@router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    room_data: RoomUpdate = Body(...),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        room = await asyncio.to_thread(
            room_service.update_room,
            room_id,
            principal,
            name=room_data.name,
            description=room_data.description,
        )
        return RoomResponse.model_validate(room)
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{room_id}/disabled", response_model=RoomResponse)
async def set_room_disabled(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    payload: RoomDisabledUpdate = Body(...),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    try:
        room = await asyncio.to_thread(
            room_service.set_disabled, room_id, principal, payload.disabled
        )
        return RoomResponse.model_validate(room)
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{room_id}/occurrences", response_model=OccurrenceListResponse)
async def list_room_occurrences(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    start: date = Query(..., description="First date (inclusive), YYYY-MM-DD"),
    end: date = Query(..., description="Last date (exclusive), YYYY-MM-DD"),
    principal: CallerPrincipal = Depends(get_current_principal),
    calendar_service: CalendarService = Depends(get_calendar_service),
) -> OccurrenceListResponse:
    """Single bookings and recurring occurrences of a room, ordered by start."""
    try:
        occurrences = await asyncio.to_thread(
            calendar_service.list_occurrences, room_id, start, end
        )
        return OccurrenceListResponse(
            room_id=room_id,
            start=start,
            end=end,
            occurrences=[serialize_occurrence(occ) for occ in occurrences],
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{room_id}/recurring-rules", response_model=List[RecurringRuleResponse])
async def list_room_recurring_rules(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    include_cancelled: bool = Query(False),
    principal: CallerPrincipal = Depends(get_current_principal),
    service: RecurringBookingService = Depends(get_recurring_booking_service),
) -> List[RecurringRuleResponse]:
    try:
        rules = await asyncio.to_thread(service.list_rules, room_id, include_cancelled)
        return [RecurringRuleResponse.model_validate(rule) for rule in rules]
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{room_id}/blocked-ranges", response_model=List[BlockedRangeResponse])
async def list_blocked_ranges(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    start: Optional[datetime] = Query(None, description="Window start"),
    end: Optional[datetime] = Query(None, description="Window end"),
    principal: CallerPrincipal = Depends(get_current_principal),
    room_service: RoomService = Depends(get_room_service),
) -> List[BlockedRangeResponse]:
    try:
        ranges = await asyncio.to_thread(room_service.list_blocked_ranges, room_id, start, end)
        return [BlockedRangeResponse.model_validate(blocked) for blocked in ranges]
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{room_id}/blocked-ranges",
    response_model=BlockedRangeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_blocked_range(
    room_id: str = Path(..., description="Room ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    payload: BlockedRangeCreate = Body(...),
    room_service: RoomService = Depends(get_room_service),
) -> BlockedRangeResponse:
    try:
        blocked = await asyncio.to_thread(
            room_service.create_blocked_range,
            room_id,
            principal,
            start=payload.start_time,
            end=payload.end_time,
            reason=payload.reason,
        )
        return BlockedRangeResponse.model_validate(blocked)
    except DomainException as e:
        handle_domain_exception(e)
