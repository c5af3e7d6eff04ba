# roomshare/schemas/occurrence.py
"""
Calendar occurrence schemas.

Occurrences are serialized as a tagged union on ``kind`` so clients can
tell stored bookings from virtual recurring instances without inspecting
ids.
"""

from datetime import date, datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from ..services.occurrences import Occurrence, SingleOccurrence
from ._strict_base import StrictModel


class SingleOccurrenceResponse(StrictModel):
    kind: Literal["single"] = "single"
    booking_id: str
    room_id: str
    owner_id: str
    title: str
    notes: Optional[str] = None
    start_time: datetime
    end_time: datetime


class RecurringOccurrenceResponse(StrictModel):
    kind: Literal["recurring"] = "recurring"
    rule_id: str
    room_id: str
    occurrence_date: date
    owner_id: Optional[str] = None
    title: str
    notes: Optional[str] = None
    start_time: datetime
    end_time: datetime


OccurrenceResponse = Annotated[
    Union[SingleOccurrenceResponse, RecurringOccurrenceResponse],
    Field(discriminator="kind"),
]


class OccurrenceListResponse(StrictModel):
    room_id: str
    start: date
    end: date
    occurrences: List[OccurrenceResponse]


def serialize_occurrence(
    occurrence: Occurrence,
) -> Union[SingleOccurrenceResponse, RecurringOccurrenceResponse]:
    if isinstance(occurrence, SingleOccurrence):
        booking = occurrence.booking
        return SingleOccurrenceResponse(
            booking_id=booking.id,
            room_id=booking.room_id,
            owner_id=booking.owner_id,
            title=booking.title,
            notes=booking.notes,
            start_time=booking.start_time,
            end_time=booking.end_time,
        )
    return RecurringOccurrenceResponse(
        rule_id=occurrence.rule_id,
        room_id=occurrence.room_id,
        occurrence_date=occurrence.occurrence_date,
        owner_id=occurrence.owner_id,
        title=occurrence.title,
        notes=occurrence.notes,
        start_time=occurrence.start_time,
        end_time=occurrence.end_time,
    )
