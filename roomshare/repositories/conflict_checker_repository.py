# roomshare/repositories/conflict_checker_repository.py
"""
ConflictChecker Repository for the roomshare backend

Range queries over the three conflict sources of a room: single bookings,
blocked time ranges and active recurring rules. The overlap filters use the
same half-open convention as ``roomshare.utils.intervals.overlaps``.
"""

from datetime import datetime
import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.recurring_booking import RecurringBookingRule
from ..models.room import BlockedTimeRange
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConflictCheckerRepository(BaseRepository[Booking]):
    """Repository for conflict checking data access."""

    def __init__(self, db: Session):
        """Initialize with Booking model as primary."""
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def get_overlapping_bookings(
        self,
        room_id: str,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Get non-cancelled bookings in the room overlapping ``[start, end)``.

        Args:
            room_id: Room to check
            start: Candidate start (inclusive)
            end: Candidate end (exclusive)
            exclude_booking_id: Optional booking ID to exclude from results

        Returns:
            Overlapping bookings ordered by start time
        """
        try:
            query = self.db.query(Booking).filter(
                Booking.room_id == room_id,
                Booking.cancelled.is_(False),
                Booking.start_time < end,
                Booking.end_time > start,
            )
            if exclude_booking_id:
                query = query.filter(Booking.id != exclude_booking_id)
            return query.order_by(Booking.start_time).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting bookings for conflict check: {str(e)}")
            raise RepositoryException(f"Failed to get conflict bookings: {str(e)}")

    def get_overlapping_blocked_ranges(
        self, room_id: str, start: datetime, end: datetime
    ) -> List[BlockedTimeRange]:
        """Get blocked ranges in the room overlapping ``[start, end)``."""
        try:
            return (
                self.db.query(BlockedTimeRange)
                .filter(
                    BlockedTimeRange.room_id == room_id,
                    BlockedTimeRange.start_time < end,
                    BlockedTimeRange.end_time > start,
                )
                .order_by(BlockedTimeRange.start_time)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting blocked ranges for conflict check: {str(e)}")
            raise RepositoryException(f"Failed to get blocked ranges: {str(e)}")

    def get_active_rules(
        self, room_id: str, days_of_week: Optional[Iterable[int]] = None
    ) -> List[RecurringBookingRule]:
        """
        Get non-cancelled recurring rules of the room.

        Args:
            room_id: Room to check
            days_of_week: Optional restriction to these weekday indexes (0 = Sunday)
        """
        try:
            query = self.db.query(RecurringBookingRule).filter(
                RecurringBookingRule.room_id == room_id,
                RecurringBookingRule.cancelled.is_(False),
            )
            if days_of_week is not None:
                query = query.filter(RecurringBookingRule.day_of_week.in_(list(days_of_week)))
            return query.order_by(RecurringBookingRule.start_minute).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting recurring rules for conflict check: {str(e)}")
            raise RepositoryException(f"Failed to get recurring rules: {str(e)}")

    def get_future_bookings(self, room_id: str, now: datetime) -> List[Booking]:
        """Non-cancelled bookings in the room that have not ended yet."""
        try:
            return (
                self.db.query(Booking)
                .filter(
                    Booking.room_id == room_id,
                    Booking.cancelled.is_(False),
                    Booking.end_time > now,
                )
                .order_by(Booking.start_time)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting future bookings: {str(e)}")
            raise RepositoryException(f"Failed to get future bookings: {str(e)}")
