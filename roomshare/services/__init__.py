"""
Service layer for the roomshare backend.

Services own business rules and transactions; repositories own queries.
"""

from .base import BaseService
from .booking_service import BookingService
from .calendar_service import CalendarService
from .conflict_checker import ConflictChecker
from .recurring_booking_service import RecurringBookingService
from .room_service import RoomService
from .settings_service import SettingsService, SettingsSnapshot
from .user_service import UserService

__all__ = [
    "BaseService",
    "BookingService",
    "CalendarService",
    "ConflictChecker",
    "RecurringBookingService",
    "RoomService",
    "SettingsService",
    "SettingsSnapshot",
    "UserService",
]
