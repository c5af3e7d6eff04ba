# roomshare/schemas/settings.py
"""Booking settings schemas."""

from pydantic import Field

from ._strict_base import StrictModel, StrictRequestModel


class SettingsUpdate(StrictRequestModel):
    granularity_minutes: int = Field(..., description="Booking grid step in minutes")
    max_advance_days: int = Field(..., description="How far ahead bookings may start")
    max_booking_duration_hours: int = Field(..., description="Longest allowed booking")
    max_active_bookings: int = Field(..., description="Per-user quota of active bookings")


class SettingsResponse(StrictModel):
    granularity_minutes: int
    max_advance_days: int
    max_booking_duration_hours: int
    max_active_bookings: int
