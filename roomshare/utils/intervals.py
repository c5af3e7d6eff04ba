"""
Half-open interval helpers.

Every overlap decision in the booking core goes through ``overlaps`` so that
single bookings, blocked ranges and recurring occurrences can never drift
apart in how they treat touching endpoints.
"""

from typing import Any


def overlaps(a_start: Any, a_end: Any, b_start: Any, b_end: Any) -> bool:
    """
    Return True when ``[a_start, a_end)`` and ``[b_start, b_end)`` overlap.

    Works for any mutually comparable bounds (datetimes, minute offsets).
    Touching endpoints (``a_end == b_start``) do not overlap.
    """
    return a_start < b_end and a_end > b_start
