# roomshare/services/room_service.py
"""
Room Service for the roomshare backend

Administration of rooms and their blocked time ranges. Reads are open to
every role; writes require ADMIN.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException, ValidationException
from ..models.room import BlockedTimeRange, Room
from ..principal import CallerPrincipal
from ..repositories import RepositoryFactory
from ..repositories.room_repository import BlockedTimeRangeRepository, RoomRepository
from .authorization import require_admin
from .base import BaseService, Clock
from .time_grid import validate_interval_shape

logger = logging.getLogger(__name__)

ROOM_NAME_MAX_LENGTH = 100
ROOM_DESCRIPTION_MAX_LENGTH = 500
BLOCK_REASON_MAX_LENGTH = 200


def _clean_room_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationException("Room name is required", details={"field": "name"})
    if len(cleaned) > ROOM_NAME_MAX_LENGTH:
        raise ValidationException(
            f"Room name cannot exceed {ROOM_NAME_MAX_LENGTH} characters",
            details={"field": "name", "max_length": ROOM_NAME_MAX_LENGTH},
        )
    return cleaned


def _clean_optional_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValidationException(
            f"{field} cannot exceed {max_length} characters",
            details={"field": field, "max_length": max_length},
        )
    return cleaned or None


class RoomService(BaseService):
    """Service layer for rooms and blocked ranges."""

    def __init__(
        self,
        db: Session,
        repository: Optional[RoomRepository] = None,
        blocked_repository: Optional[BlockedTimeRangeRepository] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(db, clock)
        self.repository = repository or RepositoryFactory.create_room_repository(db)
        self.blocked_repository = (
            blocked_repository or RepositoryFactory.create_blocked_range_repository(db)
        )

    # Rooms

    def list_rooms(self, include_disabled: bool = False) -> List[Room]:
        return self.repository.list_rooms(include_disabled=include_disabled)

    def get_room(self, room_id: str) -> Room:
        room = self.repository.get_by_id(room_id, load_relationships=False)
        if room is None:
            raise NotFoundException("Room", room_id)
        return room

    @BaseService.measure_operation("create_room")
    def create_room(
        self, principal: CallerPrincipal, *, name: str, description: Optional[str] = None
    ) -> Room:
        require_admin(principal, "manage rooms")
        name = _clean_room_name(name)
        description = _clean_optional_text(description, "description", ROOM_DESCRIPTION_MAX_LENGTH)

        with self.transaction():
            room = self.repository.create(name=name, description=description, disabled=False)

        self.log_operation("create_room", room_id=room.id, room_name=name)
        return room

    @BaseService.measure_operation("update_room")
    def update_room(
        self,
        room_id: str,
        principal: CallerPrincipal,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Room:
        """Update name and/or description; ``None`` leaves a field unchanged."""
        require_admin(principal, "manage rooms")
        room = self.get_room(room_id)

        with self.transaction():
            if name is not None:
                room.name = _clean_room_name(name)
            if description is not None:
                room.description = _clean_optional_text(
                    description, "description", ROOM_DESCRIPTION_MAX_LENGTH
                )

        self.log_operation("update_room", room_id=room.id)
        return room

    @BaseService.measure_operation("set_room_disabled")
    def set_disabled(self, room_id: str, principal: CallerPrincipal, disabled: bool) -> Room:
        """
        Enable or disable a room.

        Existing bookings and rules are kept; a disabled room only rejects
        new reservations.
        """
        require_admin(principal, "manage rooms")
        room = self.get_room(room_id)

        with self.transaction():
            room.disabled = disabled

        self.log_operation("set_room_disabled", room_id=room.id, disabled=disabled)
        return room

    # Blocked time ranges

    def list_blocked_ranges(
        self,
        room_id: str,
        window_start: Optional[datetime] = None,
        window_end: Optional[datetime] = None,
    ) -> List[BlockedTimeRange]:
        self.get_room(room_id)
        return self.blocked_repository.get_for_room_window(room_id, window_start, window_end)

    @BaseService.measure_operation("create_blocked_range")
    def create_blocked_range(
        self,
        room_id: str,
        principal: CallerPrincipal,
        *,
        start: datetime,
        end: datetime,
        reason: Optional[str] = None,
    ) -> BlockedTimeRange:
        """
        Block ``[start, end)`` in a room.

        Existing bookings inside the range are left alone; the block only
        stops new ones.
        """
        require_admin(principal, "block room time")
        self.get_room(room_id)
        validate_interval_shape(start, end)
        reason = _clean_optional_text(reason, "reason", BLOCK_REASON_MAX_LENGTH)

        with self.transaction():
            blocked = self.blocked_repository.create(
                room_id=room_id, start_time=start, end_time=end, reason=reason
            )

        self.log_operation(
            "create_blocked_range",
            blocked_range_id=blocked.id,
            room_id=room_id,
            start_time=start.isoformat(),
            end_time=end.isoformat(),
        )
        return blocked

    @BaseService.measure_operation("delete_blocked_range")
    def delete_blocked_range(self, blocked_range_id: str, principal: CallerPrincipal) -> None:
        require_admin(principal, "block room time")
        with self.transaction():
            deleted = self.blocked_repository.delete(blocked_range_id)
        if not deleted:
            raise NotFoundException("Blocked time range", blocked_range_id)

        self.log_operation("delete_blocked_range", blocked_range_id=blocked_range_id)
