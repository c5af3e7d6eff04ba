from __future__ import annotations

import os
from typing import Callable, Iterator

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("FACILITY_TIMEZONE", "UTC")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from roomshare.core.enums import UserRole  # noqa: E402
from roomshare.database import Base  # noqa: E402
from roomshare.models.room import Room  # noqa: E402
from roomshare.models.user import User  # noqa: E402
from roomshare.principal import CallerPrincipal  # noqa: E402

from .helpers import FrozenClock, make_engine, principal_for  # noqa: E402


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """A fresh in-memory database per test."""
    engine = make_engine()
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(role: UserRole = UserRole.MEMBER, name: str | None = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(name=name or f"User {n}", email=f"user{n}@example.com", role=role.value)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(UserRole.ADMIN, name="Admin")


@pytest.fixture
def member_user(make_user) -> User:
    return make_user(UserRole.MEMBER, name="Member")


@pytest.fixture
def other_member(make_user) -> User:
    return make_user(UserRole.MEMBER, name="Other Member")


@pytest.fixture
def viewer_user(make_user) -> User:
    return make_user(UserRole.VIEWER, name="Viewer")


@pytest.fixture
def admin(admin_user: User) -> CallerPrincipal:
    return principal_for(admin_user)


@pytest.fixture
def member(member_user: User) -> CallerPrincipal:
    return principal_for(member_user)


@pytest.fixture
def other(other_member: User) -> CallerPrincipal:
    return principal_for(other_member)


@pytest.fixture
def viewer(viewer_user: User) -> CallerPrincipal:
    return principal_for(viewer_user)


@pytest.fixture
def room(db: Session) -> Room:
    room = Room(name="Blue Room", description="Second floor")
    db.add(room)
    db.commit()
    return room
