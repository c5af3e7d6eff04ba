# roomshare/services/calendar_service.py
"""
Calendar read model for a room.

Merges stored single bookings with the virtual occurrences of recurring
rules into one list ordered by start time.
"""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException
from ..core.timezone_utils import local_day_start
from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from .base import BaseService, Clock
from .occurrences import Occurrence, SingleOccurrence
from .recurring_booking_service import RecurringBookingService

logger = logging.getLogger(__name__)


class CalendarService(BaseService):
    def __init__(
        self,
        db: Session,
        booking_repository: Optional[BookingRepository] = None,
        recurring_service: Optional[RecurringBookingService] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(db, clock)
        self.booking_repository = booking_repository or RepositoryFactory.create_booking_repository(db)
        self.room_repository = RepositoryFactory.create_room_repository(db)
        self.recurring_service = recurring_service or RecurringBookingService(db, clock=self.clock)

    @BaseService.measure_operation("list_occurrences")
    def list_occurrences(
        self, room_id: str, range_start: date, range_end: date
    ) -> List[Occurrence]:
        """
        Everything occupying the room between two facility-local dates.

        Args:
            room_id: Room to read
            range_start: First date (inclusive)
            range_end: Last date (exclusive)

        Returns:
            Single and recurring occurrences sorted by start time
        """
        if not self.room_repository.exists(id=room_id):
            raise NotFoundException("Room", room_id)

        recurring = self.recurring_service.expand_occurrences(room_id, range_start, range_end)
        bookings = self.booking_repository.get_room_bookings_in_window(
            room_id, local_day_start(range_start), local_day_start(range_end)
        )

        occurrences: List[Occurrence] = [SingleOccurrence(booking) for booking in bookings]
        occurrences.extend(recurring)
        occurrences.sort(key=lambda occ: occ.start_time)
        return occurrences
