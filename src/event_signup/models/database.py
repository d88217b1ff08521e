"""Engine, Redis client and the request dependencies built on them.

PostgreSQL holds events and registrations. Redis only holds the admin
field editor's unsaved drafts, which expire after FIELD_DRAFT_TTL_SECONDS.
"""

import os

import redis
from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlmodel import Session

from event_signup.config import config
from event_signup.services.field_draft_manager import FieldDraftManager

DATABASE_URL = config["database_url"]

if not DATABASE_URL:
    raise ValueError(
        "DATABASE_URL environment variable is not set. "
        "Make sure to set DATABASE_URL in the environment or local .env file."
    )

REDIS_URL = config["redis_url"]
FIELD_DRAFT_TTL_SECONDS = config["field_draft_ttl_seconds"]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine that enforces registrations.event_id ON DELETE CASCADE.

    PostgreSQL always enforces foreign keys; SQLite only does so per
    connection once the pragma is set.
    """
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine = build_engine(
    DATABASE_URL, echo=os.getenv("DEBUG", "false").lower() == "true"
)

# Drafts are small and short-lived, a modest pool is plenty
redis_client = redis.from_url(
    REDIS_URL,
    decode_responses=True,
    max_connections=20,
    socket_connect_timeout=5,
    socket_keepalive=True,
    retry_on_timeout=True,
)


def get_db():
    """Get database session"""
    with Session(engine) as session:
        yield session


def get_redis():
    """Get Redis client"""
    return redis_client


def get_field_draft_manager(
    redis_client: redis.Redis = Depends(get_redis),
) -> FieldDraftManager:
    """Draft store for the admin field editor, using the configured TTL"""
    return FieldDraftManager(redis_client, ttl_seconds=FIELD_DRAFT_TTL_SECONDS)
