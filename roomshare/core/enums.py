# roomshare/core/enums.py
"""
Core enums for the roomshare backend.

This module contains enumeration types used throughout the application
for type safety and consistency.
"""

from enum import Enum


class UserRole(str, Enum):
    """
    Roles a caller can hold.

    Resolved by the identity collaborator; the booking core only ever asks
    which of these three the authenticating principal has.
    """

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class ErrorKind(str, Enum):
    """Stable error kinds surfaced to API callers as the ``code`` field."""

    MISALIGNED_TIME = "MisalignedTime"
    DURATION_EXCEEDED = "DurationExceeded"
    TOO_FAR_IN_ADVANCE = "TooFarInAdvance"
    IN_THE_PAST = "InThePast"
    QUOTA_EXCEEDED = "QuotaExceeded"
    TIME_CONFLICT = "TimeConflict"
    ROLE_NOT_PERMITTED = "RoleNotPermitted"
    NOT_OWNER = "NotOwner"
    ALREADY_STARTED = "AlreadyStarted"
    ALREADY_CANCELLED = "AlreadyCancelled"
    NOT_FOUND = "NotFound"
    INVALID_INPUT = "InvalidInput"
    UNEXPECTED = "Unexpected"


class ConflictSource(str, Enum):
    """Where a detected time conflict came from."""

    BOOKING = "booking"
    BLOCKED = "blocked"
    RECURRING = "recurring"
