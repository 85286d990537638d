"""Shared fixtures: in-memory SQLite store, sessions, API client, fake clock."""
import itertools
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENWEATHER_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.session import build_engine, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base  # noqa: E402
from app.services import history_service  # noqa: E402


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class FakeClock:
    """Deterministic utcnow(): each call advances one second."""

    def __init__(self, start: datetime):
        self._ticks = itertools.count()
        self.start = start
        self.last = None

    def __call__(self) -> datetime:
        self.last = self.start + timedelta(seconds=next(self._ticks))
        return self.last


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))
    monkeypatch.setattr(history_service, "utcnow", fake)
    return fake
