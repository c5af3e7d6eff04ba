"""ULID ids: primary keys of every roomshare table and the caller id header."""

import ulid


def generate_ulid() -> str:
    return str(ulid.ULID())


def is_valid_ulid(value: str) -> bool:
    """True when ``value`` is a canonical 26-character ULID string."""
    try:
        ulid.ULID.from_str(value)
    except (ValueError, TypeError):
        return False
    return True
