# roomshare/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.booking_service import BookingService
from ...services.calendar_service import CalendarService
from ...services.recurring_booking_service import RecurringBookingService
from ...services.room_service import RoomService
from ...services.settings_service import SettingsService
from ...services.user_service import UserService
from .database import get_db


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_recurring_booking_service(db: Session = Depends(get_db)) -> RecurringBookingService:
    return RecurringBookingService(db)


def get_calendar_service(db: Session = Depends(get_db)) -> CalendarService:
    return CalendarService(db)


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    return RoomService(db)


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)
