# roomshare/repositories/room_repository.py
"""
Room and blocked time range repositories.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.room import BlockedTimeRange, Room
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RoomRepository(BaseRepository[Room]):
    def __init__(self, db: Session):
        super().__init__(db, Room)

    def list_rooms(self, include_disabled: bool = False) -> List[Room]:
        """Rooms in creation order, optionally including disabled ones."""
        try:
            query = self.db.query(Room)
            if not include_disabled:
                query = query.filter(Room.disabled.is_(False))
            return query.order_by(Room.created_at, Room.id).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing rooms: {str(e)}")
            raise RepositoryException(f"Failed to list rooms: {str(e)}")


class BlockedTimeRangeRepository(BaseRepository[BlockedTimeRange]):
    def __init__(self, db: Session):
        super().__init__(db, BlockedTimeRange)

    def get_for_room_window(
        self,
        room_id: str,
        window_start: Optional[datetime] = None,
        window_end: Optional[datetime] = None,
    ) -> List[BlockedTimeRange]:
        """Blocked ranges of a room, optionally restricted to those overlapping a window."""
        try:
            query = self.db.query(BlockedTimeRange).filter(BlockedTimeRange.room_id == room_id)
            if window_end is not None:
                query = query.filter(BlockedTimeRange.start_time < window_end)
            if window_start is not None:
                query = query.filter(BlockedTimeRange.end_time > window_start)
            return query.order_by(BlockedTimeRange.start_time).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting blocked ranges for room {room_id}: {str(e)}")
            raise RepositoryException(f"Failed to get blocked ranges: {str(e)}")
