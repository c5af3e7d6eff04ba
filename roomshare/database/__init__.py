"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from roomshare.core.config import settings

logger = logging.getLogger(__name__)


def build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """
    Engine options for the booking store.

    Non-SQLite engines run SERIALIZABLE by default so that two concurrent
    creates for the same slot cannot both pass the conflict check and commit.
    """
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "future": True}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True
        if settings.database_isolation_level:
            kwargs["isolation_level"] = settings.database_isolation_level
    return kwargs


def create_db_engine(db_url: str, **overrides: Any) -> Engine:
    kwargs = build_engine_kwargs(db_url)
    kwargs.update(overrides)
    new_engine = create_engine(db_url, **kwargs)
    if db_url.startswith("sqlite"):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine: Engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    import roomshare.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")


__all__ = [
    "Base",
    "SessionLocal",
    "create_db_engine",
    "engine",
    "get_db",
    "init_db",
]
