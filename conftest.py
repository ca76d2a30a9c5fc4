"""Shared pytest fixtures. Settings are read at import time, so the test database is chosen here."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from batch_engine.app.cache import clear_cache  # noqa: E402
from batch_engine.app.db.session import SessionLocal, drop_db, init_db  # noqa: E402
from batch_engine.app.schemas import DishCategory, EventContext, EventType, MenuItem, Weather  # noqa: E402


@pytest.fixture
def db():
    """Fresh tables per test on the shared in-memory database."""
    drop_db()
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient

    from batch_engine.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def _fresh_risk_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def wedding_context():
    """200-guest sunny wedding lunch at 32 degrees."""
    return EventContext(
        guest_count=200,
        weather=Weather.SUNNY,
        temperature=32,
        event_type=EventType.WEDDING,
    )


@pytest.fixture
def paneer():
    return MenuItem(name="Paneer Butter Masala", category=DishCategory.MAIN_COURSE)
