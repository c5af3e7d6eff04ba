# roomshare/services/recurring_booking_service.py
"""
Recurring Booking Service for the roomshare backend

A recurring booking is stored as one weekly rule (room, weekday, minute
range) plus a set of exception dates. Occurrences are never persisted:
they are expanded on demand for any date range.

Rule lifecycle:
    Active -> Active with exceptions (cancel_occurrence) -> Cancelled (cancel_series)
"""

from datetime import date, timedelta
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    AlreadyCancelledException,
    BookingConflictException,
    NotFoundException,
    ValidationException,
)
from ..core.timezone_utils import MINUTES_PER_DAY, day_of_week as weekday_index
from ..models.recurring_booking import RecurringBookingRule
from ..principal import CallerPrincipal
from ..repositories import RepositoryFactory
from ..repositories.recurring_rule_repository import RecurringRuleRepository
from .authorization import require_admin
from .base import BaseService, Clock
from .booking_service import (
    GENERIC_CONFLICT_MESSAGE,
    clean_notes,
    clean_title,
    get_bookable_room,
    is_concurrency_failure,
)
from .conflict_checker import ConflictChecker
from .occurrences import RecurringOccurrence, expand_rules

logger = logging.getLogger(__name__)

MAX_EXPANSION_DAYS = 366


def parse_occurrence_date(date_str: str) -> date:
    """Parse a strict ISO ``YYYY-MM-DD`` date."""
    try:
        parsed = date.fromisoformat(date_str)
    except (TypeError, ValueError):
        raise ValidationException(
            "Date must be in YYYY-MM-DD format", details={"field": "date", "value": date_str}
        )
    if parsed.isoformat() != date_str:
        raise ValidationException(
            "Date must be in YYYY-MM-DD format", details={"field": "date", "value": date_str}
        )
    return parsed


def validate_rule_shape(weekday: int, start_minute: int, end_minute: int) -> None:
    if not 0 <= weekday <= 6:
        raise ValidationException(
            "day_of_week must be between 0 (Sunday) and 6 (Saturday)",
            details={"field": "day_of_week", "value": weekday},
        )
    if not 0 <= start_minute <= MINUTES_PER_DAY - 1:
        raise ValidationException(
            "start_minute must be between 0 and 1439",
            details={"field": "start_minute", "value": start_minute},
        )
    if not 1 <= end_minute <= MINUTES_PER_DAY:
        raise ValidationException(
            "end_minute must be between 1 and 1440",
            details={"field": "end_minute", "value": end_minute},
        )
    if end_minute <= start_minute:
        raise ValidationException("End time must be after start time")


class RecurringBookingService(BaseService):
    """Service layer for weekly recurring rules and their occurrences."""

    def __init__(
        self,
        db: Session,
        repository: Optional[RecurringRuleRepository] = None,
        conflict_checker: Optional[ConflictChecker] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(db, clock)
        self.repository = repository or RepositoryFactory.create_recurring_rule_repository(db)
        self.room_repository = RepositoryFactory.create_room_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db, clock=self.clock)

    @BaseService.measure_operation("create_recurring_rule")
    def create_rule(
        self,
        principal: CallerPrincipal,
        *,
        room_id: str,
        title: str,
        day_of_week: int,
        start_minute: int,
        end_minute: int,
        notes: Optional[str] = None,
    ) -> RecurringBookingRule:
        """
        Create a weekly rule owned by the principal's effective user.

        The role check runs before any input is looked at, so a non-admin
        always gets RoleNotPermitted.

        Raises:
            RoleNotPermittedException: caller is not ADMIN
            ValidationException: malformed input or disabled room
            NotFoundException: room does not exist
            BookingConflictException: overlaps an active rule or a future booking
        """
        require_admin(principal, "create recurring bookings")

        title = clean_title(title)
        notes = clean_notes(notes)
        validate_rule_shape(day_of_week, start_minute, end_minute)
        get_bookable_room(self.db, room_id)

        self.conflict_checker.ensure_rule_has_no_conflict(
            room_id, day_of_week, start_minute, end_minute
        )

        try:
            with self.repository.transaction():
                rule = self.repository.create(
                    room_id=room_id,
                    owner_id=principal.effective_user_id,
                    title=title,
                    notes=notes,
                    day_of_week=day_of_week,
                    start_minute=start_minute,
                    end_minute=end_minute,
                    exception_dates=[],
                    cancelled=False,
                )
        except IntegrityError as exc:
            raise BookingConflictException(
                GENERIC_CONFLICT_MESSAGE, details={"room_id": room_id}
            ) from exc
        except OperationalError as exc:
            if is_concurrency_failure(exc):
                raise BookingConflictException(
                    GENERIC_CONFLICT_MESSAGE, details={"room_id": room_id}
                ) from exc
            raise

        self.log_operation(
            "create_recurring_rule",
            rule_id=rule.id,
            room_id=room_id,
            day_of_week=day_of_week,
            start_minute=start_minute,
            end_minute=end_minute,
        )
        return rule

    def expand_occurrences(
        self, room_id: str, range_start: date, range_end: date
    ) -> List[RecurringOccurrence]:
        """
        Virtual occurrences of the room's active rules in ``[range_start, range_end)``.

        Reads only; calling it any number of times yields the same result
        for unchanged rules.
        """
        if range_end < range_start:
            raise ValidationException("Range end must not be before range start")
        if range_end - range_start > timedelta(days=MAX_EXPANSION_DAYS):
            raise ValidationException(
                f"Range cannot exceed {MAX_EXPANSION_DAYS} days",
                details={"max_days": MAX_EXPANSION_DAYS},
            )
        rules = self.repository.get_rules_for_room(room_id)
        return expand_rules(rules, range_start, range_end)

    def _get_rule_or_404(self, rule_id: str) -> RecurringBookingRule:
        rule = self.repository.get_by_id(rule_id, load_relationships=False)
        if rule is None:
            raise NotFoundException("Recurring booking", rule_id)
        return rule

    @BaseService.measure_operation("cancel_recurring_occurrence")
    def cancel_occurrence(
        self, rule_id: str, date_str: str, principal: CallerPrincipal
    ) -> RecurringBookingRule:
        """
        Suppress one dated occurrence of a rule.

        Repeating the call for the same date leaves the rule unchanged.
        """
        require_admin(principal, "cancel recurring occurrences")
        rule = self._get_rule_or_404(rule_id)
        if rule.cancelled:
            raise AlreadyCancelledException("Recurring booking series is cancelled")

        occurrence_date = parse_occurrence_date(date_str)
        if weekday_index(occurrence_date) != rule.day_of_week:
            raise ValidationException(
                "Date does not fall on the rule's day of week",
                details={"date": date_str, "day_of_week": rule.day_of_week},
            )

        with self.transaction():
            added = rule.add_exception(occurrence_date.isoformat())

        if added:
            self.log_operation(
                "cancel_recurring_occurrence", rule_id=rule.id, occurrence_date=date_str
            )
        return rule

    @BaseService.measure_operation("cancel_recurring_series")
    def cancel_series(self, rule_id: str, principal: CallerPrincipal) -> RecurringBookingRule:
        """Cancel a whole series. Single bookings are never touched."""
        require_admin(principal, "cancel recurring bookings")
        rule = self._get_rule_or_404(rule_id)
        if rule.cancelled:
            return rule

        with self.transaction():
            rule.cancel(self.now())

        self.log_operation("cancel_recurring_series", rule_id=rule.id)
        return rule

    def list_rules(
        self, room_id: str, include_cancelled: bool = False
    ) -> List[RecurringBookingRule]:
        if not self.room_repository.exists(id=room_id):
            raise NotFoundException("Room", room_id)
        return self.repository.get_rules_for_room(room_id, include_cancelled=include_cancelled)
