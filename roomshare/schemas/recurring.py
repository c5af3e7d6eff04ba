# roomshare/schemas/recurring.py
"""Recurring rule schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ._strict_base import StrictModel, StrictRequestModel


class RecurringRuleCreate(StrictRequestModel):
    room_id: str
    title: str
    notes: Optional[str] = None
    day_of_week: int = Field(..., description="0 = Sunday ... 6 = Saturday")
    start_minute: int = Field(..., description="Minutes after local midnight, 0-1439")
    end_minute: int = Field(..., description="Minutes after local midnight, 1-1440")


class OccurrenceCancel(StrictRequestModel):
    date: str = Field(..., description="Occurrence date, YYYY-MM-DD", examples=["2026-03-02"])


class RecurringRuleResponse(StrictModel):
    id: str
    room_id: str
    owner_id: Optional[str] = None
    title: str
    notes: Optional[str] = None
    day_of_week: int
    start_minute: int
    end_minute: int
    exception_dates: List[str]
    cancelled: bool
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
