# roomshare/services/booking_service.py
"""
Booking Service for the roomshare backend

Handles the single (one-off) booking lifecycle:
- create, with role, room, time-grid, quota and conflict checks
- edit of title and notes
- cancellation (soft, never deletes)
- booking history of a user

Validation is fail-fast: the first violated rule is raised as a domain
exception and nothing is written.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    AlreadyCancelledException,
    AlreadyStartedException,
    BookingConflictException,
    NotFoundException,
    QuotaExceededException,
    ValidationException,
)
from ..models.booking import Booking
from ..models.room import Room
from ..principal import CallerPrincipal
from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from .authorization import ensure_can_create_booking, ensure_can_modify_booking
from .base import BaseService, Clock
from .conflict_checker import ConflictChecker
from .settings_service import SettingsService
from .time_grid import validate_time_grid

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
NOTES_MAX_LENGTH = 1000

GENERIC_CONFLICT_MESSAGE = "This time slot was just booked by someone else. Please pick another."

# SQLSTATEs for serialization failure and deadlock
_CONCURRENCY_SQLSTATES = {"40001", "40P01"}


def clean_title(title: Optional[str]) -> str:
    """Strip and validate a booking or rule title."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationException("Title is required", details={"field": "title"})
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise ValidationException(
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters",
            details={"field": "title", "max_length": TITLE_MAX_LENGTH},
        )
    return cleaned


def clean_notes(notes: Optional[str]) -> Optional[str]:
    """Strip notes; blank notes are stored as NULL."""
    if notes is None:
        return None
    cleaned = notes.strip()
    if len(cleaned) > NOTES_MAX_LENGTH:
        raise ValidationException(
            f"Notes cannot exceed {NOTES_MAX_LENGTH} characters",
            details={"field": "notes", "max_length": NOTES_MAX_LENGTH},
        )
    return cleaned or None


def is_concurrency_failure(exc: OperationalError) -> bool:
    """True for serialization failures and deadlocks raised at write time."""
    orig = getattr(exc, "orig", None)
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode in _CONCURRENCY_SQLSTATES:
        return True
    message = str(exc).lower()
    return "deadlock detected" in message or "could not serialize access" in message


def get_bookable_room(db: Session, room_id: str) -> Room:
    """Load a room for a new reservation: missing is NotFound, disabled is InvalidInput."""
    room = RepositoryFactory.create_room_repository(db).get_by_id(room_id, load_relationships=False)
    if room is None:
        raise NotFoundException("Room", room_id)
    if room.disabled:
        raise ValidationException(
            "Room is disabled and cannot be booked", details={"room_id": room_id}
        )
    return room


class BookingService(BaseService):
    """
    Service layer for single booking operations.

    Uses one settings snapshot per operation and one transaction per write.
    """

    def __init__(
        self,
        db: Session,
        repository: Optional[BookingRepository] = None,
        conflict_checker: Optional[ConflictChecker] = None,
        settings_service: Optional[SettingsService] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize booking service.

        Args:
            db: Database session
            repository: Optional BookingRepository instance
            conflict_checker: Optional conflict checker instance
            settings_service: Optional settings service instance
            clock: Optional clock override
        """
        super().__init__(db, clock)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db, clock=self.clock)
        self.settings_service = settings_service or SettingsService(db, clock=self.clock)

    @BaseService.measure_operation("create_booking")
    def create_booking(
        self,
        principal: CallerPrincipal,
        *,
        room_id: str,
        title: str,
        start: datetime,
        end: datetime,
        notes: Optional[str] = None,
    ) -> Booking:
        """
        Create a single booking for the principal's effective user.

        Args:
            principal: Caller of the operation
            room_id: Room to reserve
            title: Booking title
            start: Start instant (aware)
            end: End instant (aware)
            notes: Optional notes

        Returns:
            The persisted booking

        Raises:
            RoleNotPermittedException: VIEWER caller
            NotFoundException: room does not exist
            ValidationException: disabled room or malformed input
            BusinessRuleException subclasses: time grid or quota violations
            BookingConflictException: overlap with a booking, blocked range
                or recurring occurrence
        """
        ensure_can_create_booking(principal)
        get_bookable_room(self.db, room_id)
        title = clean_title(title)
        notes = clean_notes(notes)

        now = self.now()
        snapshot = self.settings_service.get_snapshot()
        validate_time_grid(start, end, snapshot, now)

        owner_id = principal.effective_user_id
        active_count = self.repository.count_active_for_owner(owner_id, now)
        if active_count >= snapshot.max_active_bookings:
            raise QuotaExceededException(snapshot.max_active_bookings, active_count)

        self.conflict_checker.ensure_no_conflict(room_id, start, end)

        try:
            with self.repository.transaction():
                booking = self.repository.create(
                    room_id=room_id,
                    owner_id=owner_id,
                    title=title,
                    notes=notes,
                    start_time=start,
                    end_time=end,
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
            "create_booking",
            booking_id=booking.id,
            room_id=room_id,
            owner_id=owner_id,
            created_by=principal.authenticated_user_id,
        )
        return booking

    def _get_booking_or_404(self, booking_id: str) -> Booking:
        booking = self.repository.get_booking_with_details(booking_id)
        if booking is None:
            raise NotFoundException("Booking", booking_id)
        return booking

    @BaseService.measure_operation("edit_booking")
    def edit_booking(
        self,
        booking_id: str,
        principal: CallerPrincipal,
        *,
        title: str,
        notes: Optional[str] = None,
    ) -> Booking:
        """
        Change the title and notes of a booking that has not started.

        Times and room are never editable, so no conflict check runs.
        """
        booking = self._get_booking_or_404(booking_id)
        ensure_can_modify_booking(principal, booking.owner_id, "edit")

        now = self.now()
        if booking.has_started(now):
            raise AlreadyStartedException("Cannot edit a booking that has already started")
        if booking.cancelled:
            raise AlreadyCancelledException()

        title = clean_title(title)
        notes = clean_notes(notes)

        with self.transaction():
            booking.title = title
            booking.notes = notes

        self.log_operation(
            "edit_booking", booking_id=booking.id, edited_by=principal.authenticated_user_id
        )
        return booking

    @BaseService.measure_operation("cancel_booking")
    def cancel_booking(self, booking_id: str, principal: CallerPrincipal) -> Booking:
        """
        Cancel a booking that has not started.

        Cancelling an already-cancelled booking returns it unchanged.
        """
        booking = self._get_booking_or_404(booking_id)
        ensure_can_modify_booking(principal, booking.owner_id, "cancel")

        now = self.now()
        if booking.has_started(now):
            raise AlreadyStartedException("Cannot cancel a booking that has already started")
        if booking.cancelled:
            return booking

        with self.transaction():
            booking.cancel(principal.authenticated_user_id, now)

        self.log_operation(
            "cancel_booking",
            booking_id=booking.id,
            cancelled_by=principal.authenticated_user_id,
            impersonating=principal.is_impersonating,
        )
        return booking

    @BaseService.measure_operation("get_booking_history")
    def get_booking_history(self, principal: CallerPrincipal) -> List[Booking]:
        """All bookings of the effective user, cancelled included, newest first."""
        return self.repository.get_history_for_owner(principal.effective_user_id)

    def get_booking(self, booking_id: str) -> Booking:
        return self._get_booking_or_404(booking_id)
