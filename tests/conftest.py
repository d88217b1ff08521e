"""Shared test configuration and fixtures for Event Signup tests"""

import logging
import os
from datetime import date

# The app reads its settings at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from event_signup.main import app
from event_signup.models.database import build_engine, get_db, get_redis
from event_signup.services.event_service import EventService
from event_signup.services.field_draft_manager import FieldDraftManager
from event_signup.services.field_set_editor import FieldSetEditor
from event_signup.services.registration_service import RegistrationService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def _db_session():
    """Private DB session for fixtures only.

    Do not use this fixture directly in tests. Prefer higher-level service
    fixtures like `event_service` or `registration_service`.
    """
    # Foreign keys are on, so deleting an event cascades to its registrations
    engine = build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    session = Session(engine)

    yield session

    session.close()
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def redis_client():
    """Isolated in-memory Redis for each test"""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def event_service(_db_session):
    """Create an EventService instance for testing"""
    return EventService(_db_session)


@pytest.fixture
def registration_service(_db_session):
    """Create a RegistrationService instance for testing"""
    return RegistrationService(_db_session)


@pytest.fixture
def draft_manager(redis_client):
    """Create a FieldDraftManager instance for testing"""
    return FieldDraftManager(redis_client=redis_client, ttl_seconds=1800)


@pytest.fixture
def field_set_editor(event_service, draft_manager):
    """Create a FieldSetEditor instance for testing"""
    return FieldSetEditor(event_service, draft_manager)


@pytest.fixture
def sample_event(event_service):
    """An active event with the default fields"""
    return event_service.create_event(
        name="Launch", event_date=date(2025, 3, 1), location="HQ"
    )


@pytest.fixture
def client(_db_session, redis_client):
    """Create a test client that uses the test database and Redis"""
    original_overrides = app.dependency_overrides.copy()

    def get_test_db():
        return _db_session

    def get_test_redis():
        return redis_client

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_redis] = get_test_redis

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
