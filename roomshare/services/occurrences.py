# roomshare/services/occurrences.py
"""
Occurrence variants and weekly rule expansion.

An occurrence is either a stored single booking or a virtual, dated
instance of a recurring rule. Callers dispatch on the variant instead of
guessing from ids.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from ..core.timezone_utils import iter_dates, local_instant
from ..models.booking import Booking
from ..models.recurring_booking import RecurringBookingRule


@dataclass(frozen=True)
class SingleOccurrence:
    booking: Booking

    kind = "single"

    @property
    def start_time(self) -> datetime:
        return self.booking.start_time

    @property
    def end_time(self) -> datetime:
        return self.booking.end_time


@dataclass(frozen=True)
class RecurringOccurrence:
    rule_id: str
    room_id: str
    occurrence_date: date
    start_time: datetime
    end_time: datetime
    title: str
    notes: Optional[str] = None
    owner_id: Optional[str] = None

    kind = "recurring"


Occurrence = Union[SingleOccurrence, RecurringOccurrence]


def occurrence_for(rule: RecurringBookingRule, day: date) -> RecurringOccurrence:
    """Build the occurrence of ``rule`` on ``day`` (no exception/weekday check)."""
    return RecurringOccurrence(
        rule_id=rule.id,
        room_id=rule.room_id,
        occurrence_date=day,
        start_time=local_instant(day, rule.start_minute),
        end_time=local_instant(day, rule.end_minute),
        title=rule.title,
        notes=rule.notes,
        owner_id=rule.owner_id,
    )


def expand_rules(
    rules: Iterable[RecurringBookingRule], range_start: date, range_end: date
) -> List[RecurringOccurrence]:
    """
    Expand rules over every calendar date in ``[range_start, range_end)``.

    Cancelled rules and exception dates produce nothing. The result depends
    only on the rules and the range, and is ordered by start time.
    """
    rules = list(rules)
    occurrences = [
        occurrence_for(rule, day)
        for day in iter_dates(range_start, range_end)
        for rule in rules
        if rule.occurs_on(day)
    ]
    occurrences.sort(key=lambda occ: (occ.start_time, occ.rule_id))
    return occurrences
