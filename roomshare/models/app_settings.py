# roomshare/models/app_settings.py
"""
Singleton booking settings row.

The booking core only reads it (as an immutable snapshot taken at the start
of each operation); admins change it through the settings service.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from ..database import Base

APP_SETTINGS_ID = "default"


class AppSettings(Base):
    __tablename__ = "app_settings"

    id = Column(String(20), primary_key=True, default=APP_SETTINGS_ID)
    granularity_minutes = Column(Integer, nullable=False)
    max_advance_days = Column(Integer, nullable=False)
    max_booking_duration_hours = Column(Integer, nullable=False)
    max_active_bookings = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("granularity_minutes > 0", name="ck_settings_granularity_positive"),
        CheckConstraint("max_active_bookings > 0", name="ck_settings_quota_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<AppSettings granularity={self.granularity_minutes}m "
            f"advance={self.max_advance_days}d duration={self.max_booking_duration_hours}h "
            f"quota={self.max_active_bookings}>"
        )
