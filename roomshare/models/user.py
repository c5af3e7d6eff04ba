# roomshare/models/user.py
"""
User model for the roomshare backend.

Identity lives in the external auth collaborator; this table is the local
projection the booking core needs for ownership and role decisions.
"""

import logging

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..core.enums import UserRole
from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class User(Base):
    """
    A person who can hold bookings.

    Attributes:
        id: ULID primary key (shared with the identity provider)
        name: Display name
        email: Unique email address
        role: ADMIN, MEMBER or VIEWER
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(10), nullable=False, default=UserRole.MEMBER.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    bookings = relationship("Booking", back_populates="owner", foreign_keys="Booking.owner_id")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
