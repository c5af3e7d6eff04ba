# roomshare/models/booking.py
"""
Single booking model.

A booking is a one-off reservation of a room for ``[start_time, end_time)``.
Once cancelled it stays in the table as immutable history; rows are only
ever removed together with their owner's account.
"""

from datetime import datetime
import logging
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime

logger = logging.getLogger(__name__)


class Booking(Base):
    """
    One-off reservation owned by a single user.

    Times are immutable after creation; only title and notes can change.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    room_id = Column(String(26), ForeignKey("rooms.id"), nullable=False)
    owner_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    notes = Column(Text, nullable=True)
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)

    cancelled = Column(Boolean, nullable=False, default=False)
    cancelled_at = Column(UTCDateTime, nullable=True)
    cancelled_by_id = Column(String(26), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    room = relationship("Room", back_populates="bookings")
    owner = relationship("User", back_populates="bookings", foreign_keys=[owner_id])

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_bookings_positive_duration"),
        Index("idx_bookings_room_window", "room_id", "start_time", "end_time"),
        # Storage-level backstop for two concurrent creates of the same slot
        Index(
            "uq_bookings_room_start_active",
            "room_id",
            "start_time",
            unique=True,
            sqlite_where=text("NOT cancelled"),
            postgresql_where=text("NOT cancelled"),
        ),
    )

    def has_started(self, now: datetime) -> bool:
        return self.start_time <= now

    def is_active(self, now: datetime) -> bool:
        """Counts toward the owner's quota: not cancelled and not yet ended."""
        return not self.cancelled and self.end_time > now

    def cancel(self, cancelled_by_id: Optional[str], now: datetime) -> None:
        """Flag as cancelled. The row itself is kept."""
        self.cancelled = True
        self.cancelled_at = now
        self.cancelled_by_id = cancelled_by_id

    def __repr__(self) -> str:
        return f"<Booking {self.id} room={self.room_id} {self.start_time}-{self.end_time}>"
