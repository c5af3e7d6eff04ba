# roomshare/core/exceptions.py
"""
Domain-specific exceptions for the roomshare backend.

Every exception carries an ``ErrorKind`` so the API layer can return a
stable, typed error to the caller. Subclasses add the context needed to
render a precise message (the limit that was violated, the conflicting
record, ...). Only ``ServiceException`` discards detail.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .enums import ConflictSource, ErrorKind

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.kind.value
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when request input is malformed."""

    kind = ErrorKind.INVALID_INPUT
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        super().__init__(
            message=f"{resource} not found",
            details={"resource": resource, "id": resource_id} if resource_id else {"resource": resource},
        )


class ForbiddenException(DomainException):
    """Raised when the caller lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class ServiceException(DomainException):
    """
    Raised when a service operation fails unexpectedly.

    The caller only ever sees a generic message; the original error is
    logged where it is caught.
    """

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": "An error occurred processing your request",
                "code": self.code,
                "details": {},
            },
        )


# Time-grid violations


class MisalignedTimeException(BusinessRuleException):
    kind = ErrorKind.MISALIGNED_TIME

    def __init__(self, granularity_minutes: int):
        super().__init__(
            message=f"Times must align to {granularity_minutes}-minute increments",
            details={"granularity_minutes": granularity_minutes},
        )


class DurationExceededException(BusinessRuleException):
    kind = ErrorKind.DURATION_EXCEEDED

    def __init__(self, max_hours: int, requested_minutes: int):
        super().__init__(
            message=f"Booking duration cannot exceed {max_hours} hours",
            details={"max_hours": max_hours, "requested_minutes": requested_minutes},
        )


class TooFarInAdvanceException(BusinessRuleException):
    kind = ErrorKind.TOO_FAR_IN_ADVANCE

    def __init__(self, max_days: int):
        super().__init__(
            message=f"Cannot book more than {max_days} days in advance",
            details={"max_days": max_days},
        )


class InThePastException(BusinessRuleException):
    kind = ErrorKind.IN_THE_PAST

    def __init__(self) -> None:
        super().__init__(message="Cannot book in the past")


# Lifecycle violations


class QuotaExceededException(BusinessRuleException):
    kind = ErrorKind.QUOTA_EXCEEDED

    def __init__(self, limit: int, active_count: int):
        super().__init__(
            message=f"Maximum {limit} active bookings allowed",
            details={"limit": limit, "active_count": active_count},
        )


class AlreadyStartedException(BusinessRuleException):
    kind = ErrorKind.ALREADY_STARTED

    def __init__(self, message: str = "Booking has already started"):
        super().__init__(message=message)


class AlreadyCancelledException(BusinessRuleException):
    kind = ErrorKind.ALREADY_CANCELLED

    def __init__(self, message: str = "Booking is cancelled and can no longer be changed"):
        super().__init__(message=message)


class BookingConflictException(ConflictException):
    """Raised when a candidate interval overlaps an existing reservation."""

    kind = ErrorKind.TIME_CONFLICT

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        source: Optional[ConflictSource] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged = dict(details or {})
        if source is not None:
            merged["source"] = source.value
        super().__init__(
            message=message or "Time slot conflict: another reservation overlaps this time",
            details=merged,
        )


# Authorization


class RoleNotPermittedException(ForbiddenException):
    kind = ErrorKind.ROLE_NOT_PERMITTED

    def __init__(self, message: str = "Your role does not permit this action"):
        super().__init__(message=message)


class NotOwnerException(ForbiddenException):
    kind = ErrorKind.NOT_OWNER

    def __init__(self, message: str = "Can only modify your own bookings"):
        super().__init__(message=message)


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
