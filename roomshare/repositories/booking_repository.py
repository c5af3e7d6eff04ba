# roomshare/repositories/booking_repository.py
"""
Booking Repository for the roomshare backend

Data access for the single booking lifecycle: detail loads, quota counts,
calendar window reads and per-owner history.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Booking.room))

    def get_booking_with_details(self, booking_id: str) -> Optional[Booking]:
        """Get a booking with its room loaded."""
        return self.get_by_id(booking_id, load_relationships=True)

    def count_active_for_owner(self, owner_id: str, now: datetime) -> int:
        """
        Count bookings that use up quota: not cancelled and not yet ended.

        Args:
            owner_id: Booking owner
            now: Reference instant
        """
        try:
            return (
                self.db.query(Booking)
                .filter(
                    Booking.owner_id == owner_id,
                    Booking.cancelled.is_(False),
                    Booking.end_time > now,
                )
                .count()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting active bookings for {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to count active bookings: {str(e)}")

    def get_room_bookings_in_window(
        self, room_id: str, window_start: datetime, window_end: datetime
    ) -> List[Booking]:
        """Non-cancelled bookings of a room overlapping ``[window_start, window_end)``."""
        try:
            return (
                self.db.query(Booking)
                .filter(
                    Booking.room_id == room_id,
                    Booking.cancelled.is_(False),
                    Booking.start_time < window_end,
                    Booking.end_time > window_start,
                )
                .order_by(Booking.start_time)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting bookings for room {room_id}: {str(e)}")
            raise RepositoryException(f"Failed to get room bookings: {str(e)}")

    def get_history_for_owner(self, owner_id: str) -> List[Booking]:
        """All bookings of an owner, cancelled included, newest start first."""
        try:
            return (
                self.db.query(Booking)
                .options(joinedload(Booking.room))
                .filter(Booking.owner_id == owner_id)
                .order_by(Booking.start_time.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting booking history for {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to get booking history: {str(e)}")

    def get_active_for_owner(self, owner_id: str, now: datetime) -> List[Booking]:
        """Bookings of an owner that still count toward quota."""
        try:
            return (
                self.db.query(Booking)
                .filter(
                    Booking.owner_id == owner_id,
                    Booking.cancelled.is_(False),
                    Booking.end_time > now,
                )
                .order_by(Booking.start_time)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting active bookings for {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to get active bookings: {str(e)}")

    def delete_for_owner(self, owner_id: str) -> int:
        """Hard-delete every booking of an owner. Only used when removing a user."""
        try:
            return (
                self.db.query(Booking)
                .filter(Booking.owner_id == owner_id)
                .delete(synchronize_session="fetch")
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting bookings for {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete bookings: {str(e)}")
