"""Shared test helpers: fixed clock, instants and principals."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from roomshare.core.enums import UserRole
from roomshare.database import Base, create_db_engine
from roomshare.models.user import User
from roomshare.principal import CallerPrincipal

# Sunday 2026-03-01 08:00 UTC
FIXED_NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Injectable clock that only moves when a test moves it."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


def at(day: int, hour: int, minute: int = 0, month: int = 3) -> datetime:
    """Aware UTC instant in 2026."""
    return datetime(2026, month, day, hour, minute, tzinfo=timezone.utc)


def make_engine() -> Engine:
    """In-memory SQLite engine with the full schema."""
    import roomshare.models  # noqa: F401

    engine = create_db_engine("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return engine


def principal_for(user: User, acting_as: User | None = None) -> CallerPrincipal:
    return CallerPrincipal(
        authenticated_user_id=user.id,
        authenticated_role=UserRole(user.role),
        acting_as_user_id=acting_as.id if acting_as is not None else None,
    )


def headers_for(user: User, acting_as: User | None = None) -> dict[str, str]:
    """Identity headers the upstream gateway would forward."""
    headers = {"X-User-Id": user.id}
    if acting_as is not None:
        headers["X-Act-As-User-Id"] = acting_as.id
    return headers
