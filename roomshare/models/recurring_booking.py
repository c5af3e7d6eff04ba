# roomshare/models/recurring_booking.py
"""
Weekly recurring booking rule.

A rule recurs indefinitely on one day of the week between two
minutes-of-day. Occurrences are never stored: they are derived on read
from the rule and its exception dates.
"""

from datetime import date, datetime
import logging

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.timezone_utils import day_of_week
from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import StringListType, UTCDateTime

logger = logging.getLogger(__name__)


class RecurringBookingRule(Base):
    """
    Weekly rule: (day_of_week, start_minute, end_minute) plus exception dates.

    day_of_week uses 0 = Sunday ... 6 = Saturday.
    """

    __tablename__ = "recurring_booking_rules"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    room_id = Column(String(26), ForeignKey("rooms.id"), nullable=False)
    owner_id = Column(String(26), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    title = Column(String(200), nullable=False)
    notes = Column(Text, nullable=True)
    day_of_week = Column(Integer, nullable=False)
    start_minute = Column(Integer, nullable=False)
    end_minute = Column(Integer, nullable=False)

    exception_dates = Column(StringListType, nullable=False, default=list)

    cancelled = Column(Boolean, nullable=False, default=False)
    cancelled_at = Column(UTCDateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    room = relationship("Room", back_populates="recurring_rules")
    owner = relationship("User")

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_rules_day_of_week"),
        CheckConstraint("start_minute >= 0 AND end_minute <= 1440", name="ck_rules_minute_bounds"),
        CheckConstraint("end_minute > start_minute", name="ck_rules_positive_duration"),
        Index("idx_rules_room_day", "room_id", "day_of_week"),
        Index(
            "uq_rules_room_slot_active",
            "room_id",
            "day_of_week",
            "start_minute",
            unique=True,
            sqlite_where=text("NOT cancelled"),
            postgresql_where=text("NOT cancelled"),
        ),
    )

    def occurs_on(self, day: date) -> bool:
        """True if the rule produces an occurrence on ``day``."""
        return (
            not self.cancelled
            and day_of_week(day) == self.day_of_week
            and day.isoformat() not in self.exception_set
        )

    @property
    def exception_set(self) -> set[str]:
        return set(self.exception_dates or [])

    def add_exception(self, date_str: str) -> bool:
        """
        Suppress the occurrence on ``date_str``.

        Returns False when the date was already excepted. A new list is
        assigned so the change is picked up by the ORM.
        """
        current = self.exception_set
        if date_str in current:
            return False
        current.add(date_str)
        self.exception_dates = sorted(current)
        return True

    def cancel(self, now: datetime) -> None:
        self.cancelled = True
        self.cancelled_at = now

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return (
            f"<RecurringBookingRule {self.id} dow={self.day_of_week} "
            f"{self.start_minute}-{self.end_minute} ({state})>"
        )
