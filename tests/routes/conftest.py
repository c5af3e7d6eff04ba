from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import sessionmaker

from roomshare.api.dependencies.database import get_db
from roomshare.main import app


@pytest.fixture
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    def _get_test_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def slot_start() -> datetime:
    """An aligned instant two days from now (inside the default advance window)."""
    return (datetime.now(timezone.utc) + timedelta(days=2)).replace(
        hour=10, minute=0, second=0, microsecond=0
    )
