# roomshare/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import (
    blocked_ranges,
    bookings,
    health,
    prometheus,
    recurring_rules,
    rooms,
    settings,
    users,
)

__all__ = [
    "blocked_ranges",
    "bookings",
    "health",
    "prometheus",
    "recurring_rules",
    "rooms",
    "settings",
    "users",
]
