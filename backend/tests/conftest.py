"""Pytest fixtures — in-memory SQLite database and fresh shared state per test."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from rsvp_api.cache import ResponseCache, get_response_cache
from rsvp_api.database import Base, get_db
from rsvp_api.main import app
from rsvp_api.config import settings
from rsvp_api.rate_limiter import limiter

# Import all models so they register with Base.metadata
from rsvp_api.models.rsvp import RSVP  # noqa: F401


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh in-memory engine for each test, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def cache():
    return ResponseCache(ttl_seconds=600)


@pytest.fixture(scope="function")
def rate_limits(monkeypatch):
    """Empty limiter storage and quotas generous enough that ordinary tests never trip them."""
    monkeypatch.setattr(settings, "RATE_LIMIT_GLOBAL", 1000)
    monkeypatch.setattr(settings, "RATE_LIMIT_SUBMIT", 1000)
    limiter.reset()
    yield settings
    limiter.reset()


@pytest.fixture(scope="function")
def client(db_engine, cache, rate_limits):
    """TestClient with database and cache swapped for per-test instances."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_response_cache] = lambda: cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helper: submit an RSVP via the API, returns the response
# ---------------------------------------------------------------------------
def submit_rsvp(client: TestClient, event_id: str = "e1", name: str = "Ana",
                message: str = "hi", confirmation: str = "attending", headers: dict = None):
    """Helper — POST /api/rsvp and return the raw response."""
    return client.post("/api/rsvp", json={
        "eventId": event_id,
        "name": name,
        "message": message,
        "confirmation": confirmation,
    }, headers=headers)
