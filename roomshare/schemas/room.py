# roomshare/schemas/room.py
"""Room and blocked time range schemas."""

from datetime import datetime
from typing import Optional

from ._strict_base import StrictModel, StrictRequestModel


class RoomCreate(StrictRequestModel):
    name: str
    description: Optional[str] = None


class RoomUpdate(StrictRequestModel):
    name: Optional[str] = None
    description: Optional[str] = None


class RoomDisabledUpdate(StrictRequestModel):
    disabled: bool


class RoomResponse(StrictModel):
    id: str
    name: str
    description: Optional[str] = None
    disabled: bool
    created_at: Optional[datetime] = None


class BlockedRangeCreate(StrictRequestModel):
    start_time: datetime
    end_time: datetime
    reason: Optional[str] = None


class BlockedRangeResponse(StrictModel):
    id: str
    room_id: str
    start_time: datetime
    end_time: datetime
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
