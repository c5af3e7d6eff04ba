# roomshare/routes/v1/blocked_ranges.py
"""Blocked time range routes - API v1 (listing and creation live under /rooms)."""

import asyncio
import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.params import Path

from ...api.dependencies import get_room_service, require_admin
from ...core.exceptions import DomainException
from ...principal import CallerPrincipal
from ...services.room_service import RoomService
from .bookings import ULID_PATH_PATTERN, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["blocked-ranges-v1"])


@router.delete("/{blocked_range_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blocked_range(
    blocked_range_id: str = Path(..., description="Blocked range ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    room_service: RoomService = Depends(get_room_service),
) -> Response:
    try:
        await asyncio.to_thread(room_service.delete_blocked_range, blocked_range_id, principal)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
