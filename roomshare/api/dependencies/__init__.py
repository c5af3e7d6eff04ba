# roomshare/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_principal, get_current_user, require_admin
from .database import get_db
from .services import (
    get_booking_service,
    get_calendar_service,
    get_recurring_booking_service,
    get_room_service,
    get_settings_service,
    get_user_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_principal",
    "require_admin",
    # Database
    "get_db",
    # Services
    "get_booking_service",
    "get_calendar_service",
    "get_recurring_booking_service",
    "get_room_service",
    "get_settings_service",
    "get_user_service",
]
