# roomshare/schemas/user.py
"""User administration schemas."""

from datetime import datetime
from typing import Optional

from ..core.enums import UserRole
from ._strict_base import StrictModel, StrictRequestModel


class UserCreate(StrictRequestModel):
    name: str
    email: str
    role: UserRole = UserRole.MEMBER


class UserRoleUpdate(StrictRequestModel):
    role: UserRole


class UserResponse(StrictModel):
    id: str
    name: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None
