import json
import logging
import uuid
from typing import Optional, Sequence, Tuple

import redis
from pydantic import ValidationError

from event_signup.models.field_schema import FieldSchema, dump_fields

logger = logging.getLogger(__name__)


class FieldDraftManager:
    """
    Keeps unsaved field-editor state in Redis with automatic TTL.

    Each event has at most one draft: the complete ordered field list the
    admin is working on. Saving the event's fields clears the draft; an
    untouched draft expires after the sliding TTL window.
    """

    def __init__(self, redis_client: redis.Redis, ttl_seconds: int = 1800):
        """
        Initialize FieldDraftManager with Redis backend.

        Args:
            redis_client: Redis client instance (from dependency injection)
            ttl_seconds: Time-to-live in seconds (default: 1800 = 30 minutes)
        """
        self.redis_client = redis_client
        self.ttl_seconds = ttl_seconds

    def _draft_key(self, event_id: uuid.UUID) -> str:
        return f"field_draft:{event_id}"

    def get_draft(self, event_id: uuid.UUID) -> Optional[Tuple[FieldSchema, ...]]:
        """
        Retrieve the draft field list for an event.

        Returns:
            Tuple of FieldSchema, or None if there is no usable draft

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._draft_key(event_id)
        try:
            draft_json = self.redis_client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis error getting field draft for event {event_id}: {e}")
            raise

        if not draft_json:
            return None

        try:
            return tuple(FieldSchema.model_validate(f) for f in json.loads(draft_json))
        except (json.JSONDecodeError, ValidationError, TypeError):
            logger.error(f"Corrupted field draft for event {event_id}, ignoring it")
            return None

    def set_draft(self, event_id: uuid.UUID, fields: Sequence[FieldSchema]) -> None:
        """
        Store the draft field list and refresh its TTL.

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._draft_key(event_id)
        try:
            self.redis_client.setex(key, self.ttl_seconds, json.dumps(dump_fields(fields)))
        except redis.RedisError as e:
            logger.error(f"Redis error storing field draft for event {event_id}: {e}")
            raise

    def clear_draft(self, event_id: uuid.UUID) -> None:
        """
        Drop the draft for an event.

        Raises:
            redis.RedisError: If Redis operation fails
        """
        key = self._draft_key(event_id)
        try:
            self.redis_client.delete(key)
            logger.info(f"Cleared field draft for event {event_id}")
        except redis.RedisError as e:
            logger.error(f"Redis error clearing field draft for event {event_id}: {e}")
            raise
