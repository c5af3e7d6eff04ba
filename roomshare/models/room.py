# roomshare/models/room.py
"""
Room and blocked time range models.

A room is the partition key for every conflict check. Disabling a room
takes it out of new-booking flows without touching its history.
"""

import logging

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime

logger = logging.getLogger(__name__)


class Room(Base):
    """A shared physical room that can be reserved."""

    __tablename__ = "rooms"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    disabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    bookings = relationship("Booking", back_populates="room")
    recurring_rules = relationship("RecurringBookingRule", back_populates="room")
    blocked_ranges = relationship(
        "BlockedTimeRange", back_populates="room", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        state = "disabled" if self.disabled else "enabled"
        return f"<Room {self.name} ({state})>"


class BlockedTimeRange(Base):
    """Administrator-managed window during which a room cannot be booked."""

    __tablename__ = "blocked_time_ranges"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    room_id = Column(String(26), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    reason = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    room = relationship("Room", back_populates="blocked_ranges")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_blocked_range_positive"),
        Index("idx_blocked_ranges_room_window", "room_id", "start_time", "end_time"),
    )

    def __repr__(self) -> str:
        return f"<BlockedTimeRange {self.start_time}-{self.end_time} - {self.reason or 'No reason'}>"
