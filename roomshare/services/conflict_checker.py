# roomshare/services/conflict_checker.py
"""
Conflict Checker Service for the roomshare backend

Decides whether a candidate interval in a room collides with anything
already reserved there:
- non-cancelled single bookings
- blocked time ranges
- occurrences of active recurring rules

Every comparison goes through ``roomshare.utils.intervals.overlaps`` so
back-to-back intervals never conflict.
"""

from datetime import date, datetime, timedelta
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import ConflictSource
from ..core.exceptions import BookingConflictException
from ..core.timezone_utils import day_of_week, local_instant, to_facility_time
from ..repositories import RepositoryFactory
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from ..utils.intervals import overlaps
from .base import BaseService, Clock
from .occurrences import expand_rules

logger = logging.getLogger(__name__)


def _local_dates_touched(start: datetime, end: datetime) -> tuple[date, date]:
    """First and last facility-local calendar dates an interval can touch."""
    first = to_facility_time(start).date() - timedelta(days=1)
    last = to_facility_time(end).date()
    return first, last


class ConflictChecker(BaseService):
    """
    Service for checking booking conflicts.

    Sources are checked in a fixed order (bookings, blocked ranges,
    recurring occurrences) and the first hit is reported.
    """

    def __init__(
        self,
        db: Session,
        repository: Optional[ConflictCheckerRepository] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize conflict checker service.

        Args:
            db: Database session
            repository: Optional ConflictCheckerRepository instance
            clock: Optional clock override
        """
        super().__init__(db, clock)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_conflict_checker_repository(db)

    @BaseService.measure_operation("check_booking_conflicts")
    def check_booking_conflicts(
        self,
        room_id: str,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List everything in the room that overlaps ``[start, end)``.

        Args:
            room_id: The room to check
            start: Candidate start
            end: Candidate end
            exclude_booking_id: Booking being edited, ignored as a conflict

        Returns:
            Conflicts in source order, each with ``source``, ``id``,
            ``start_time`` and ``end_time``
        """
        conflicts: List[Dict[str, Any]] = []

        for booking in self.repository.get_overlapping_bookings(
            room_id, start, end, exclude_booking_id
        ):
            conflicts.append(
                {
                    "source": ConflictSource.BOOKING.value,
                    "id": booking.id,
                    "start_time": booking.start_time.isoformat(),
                    "end_time": booking.end_time.isoformat(),
                }
            )

        for blocked in self.repository.get_overlapping_blocked_ranges(room_id, start, end):
            conflicts.append(
                {
                    "source": ConflictSource.BLOCKED.value,
                    "id": blocked.id,
                    "start_time": blocked.start_time.isoformat(),
                    "end_time": blocked.end_time.isoformat(),
                    "reason": blocked.reason,
                }
            )

        for occurrence in self._overlapping_rule_occurrences(room_id, start, end):
            conflicts.append(
                {
                    "source": ConflictSource.RECURRING.value,
                    "id": occurrence.rule_id,
                    "date": occurrence.occurrence_date.isoformat(),
                    "start_time": occurrence.start_time.isoformat(),
                    "end_time": occurrence.end_time.isoformat(),
                }
            )

        if conflicts:
            self.logger.info(
                f"Found {len(conflicts)} conflicts in room {room_id} "
                f"between {start.isoformat()}-{end.isoformat()}"
            )
        return conflicts

    def ensure_no_conflict(
        self,
        room_id: str,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        """
        Raise ``BookingConflictException`` for the first conflict found.

        Args:
            room_id: The room to check
            start: Candidate start
            end: Candidate end
            exclude_booking_id: Booking being edited
        """
        conflicts = self.check_booking_conflicts(room_id, start, end, exclude_booking_id)
        if not conflicts:
            return

        first = conflicts[0]
        source = ConflictSource(first["source"])
        messages = {
            ConflictSource.BOOKING: "Time slot conflicts with an existing booking",
            ConflictSource.BLOCKED: "Time slot falls inside a blocked period",
            ConflictSource.RECURRING: "Time slot conflicts with a recurring booking",
        }
        raise BookingConflictException(
            messages[source],
            source=source,
            details={"conflicting_id": first["id"]},
        )

    def _overlapping_rule_occurrences(self, room_id: str, start: datetime, end: datetime):
        first, last = _local_dates_touched(start, end)
        weekdays = {day_of_week(first + timedelta(days=n)) for n in range((last - first).days + 1)}
        rules = self.repository.get_active_rules(room_id, weekdays)
        if not rules:
            return []
        return [
            occurrence
            for occurrence in expand_rules(rules, first, last + timedelta(days=1))
            if overlaps(occurrence.start_time, occurrence.end_time, start, end)
        ]

    @BaseService.measure_operation("check_rule_conflicts")
    def ensure_rule_has_no_conflict(
        self, room_id: str, weekday: int, start_minute: int, end_minute: int
    ) -> None:
        """
        Validate a new weekly rule against the room.

        A rule conflicts with any active rule on the same weekday whose
        minute range overlaps, and with any future single booking whose
        occurrence on a matching weekday overlaps.

        Raises:
            BookingConflictException: first conflicting rule or booking
        """
        for rule in self.repository.get_active_rules(room_id, [weekday]):
            if overlaps(rule.start_minute, rule.end_minute, start_minute, end_minute):
                raise BookingConflictException(
                    "Recurring booking overlaps an existing recurring booking",
                    source=ConflictSource.RECURRING,
                    details={"conflicting_id": rule.id},
                )

        for booking in self.repository.get_future_bookings(room_id, self.now()):
            first, last = _local_dates_touched(booking.start_time, booking.end_time)
            day = first
            while day <= last:
                if day_of_week(day) == weekday:
                    occ_start = local_instant(day, start_minute)
                    occ_end = local_instant(day, end_minute)
                    if overlaps(booking.start_time, booking.end_time, occ_start, occ_end):
                        raise BookingConflictException(
                            "Recurring booking overlaps an existing booking",
                            source=ConflictSource.BOOKING,
                            details={"conflicting_id": booking.id, "date": day.isoformat()},
                        )
                day += timedelta(days=1)
