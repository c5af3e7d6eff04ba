# roomshare/schemas/booking.py
"""
Booking schemas for the roomshare API.

Request models only check types; business rules (title length, time grid,
quota, conflicts) are enforced by BookingService so every caller gets the
same errors.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..models.booking import Booking
from ._strict_base import StrictModel, StrictRequestModel


class BookingCreate(StrictRequestModel):
    """Create a single booking. Times must carry a UTC offset."""

    room_id: str = Field(..., description="Room to reserve")
    title: str = Field(..., description="Short title shown on the calendar")
    notes: Optional[str] = Field(None, description="Optional free-text notes")
    start_time: datetime = Field(..., description="Start instant, ISO 8601 with offset")
    end_time: datetime = Field(..., description="End instant (exclusive)")


class BookingUpdate(StrictRequestModel):
    """Only title and notes of a booking can change."""

    title: str
    notes: Optional[str] = None


class BookingResponse(StrictModel):
    id: str
    room_id: str
    room_name: Optional[str] = None
    owner_id: str
    title: str
    notes: Optional[str] = None
    start_time: datetime
    end_time: datetime
    cancelled: bool
    cancelled_at: Optional[datetime] = None
    cancelled_by_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            room_name=booking.room.name if booking.room is not None else None,
            owner_id=booking.owner_id,
            title=booking.title,
            notes=booking.notes,
            start_time=booking.start_time,
            end_time=booking.end_time,
            cancelled=booking.cancelled,
            cancelled_at=booking.cancelled_at,
            cancelled_by_id=booking.cancelled_by_id,
            created_at=booking.created_at,
        )
