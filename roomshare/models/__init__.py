"""
Database models for the roomshare backend.

- User: local projection of the external identity
- Room / BlockedTimeRange: bookable rooms and admin-blocked windows
- Booking: one-off reservations
- RecurringBookingRule: weekly rules expanded into virtual occurrences
- AppSettings: singleton booking settings
"""

from .app_settings import APP_SETTINGS_ID, AppSettings
from .booking import Booking
from .recurring_booking import RecurringBookingRule
from .room import BlockedTimeRange, Room
from .user import User

__all__ = [
    "APP_SETTINGS_ID",
    "AppSettings",
    "BlockedTimeRange",
    "Booking",
    "RecurringBookingRule",
    "Room",
    "User",
]
