"""Field set editor: per-event editing of registration field schemas.

Every edit produces a fresh tuple snapshot; the previous list is never
mutated. Edits accumulate in a draft (see FieldDraftManager) until saved,
at which point the whole list replaces the event's fields in one write.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Optional, Sequence, Tuple

from event_signup.models.event import Event
from event_signup.models.field_schema import FieldSchema
from event_signup.models.field_type import FieldType
from event_signup.services.event_service import EventService
from event_signup.services.field_draft_manager import FieldDraftManager

logger = logging.getLogger(__name__)

CUSTOM_FIELD_LABEL = "Custom Field"


class FieldNameConflictError(ValueError):
    """Raised when an edit would give two fields the same name"""


class LastFieldError(ValueError):
    """Raised when an edit would leave an event without fields"""


def _check_index(fields: Sequence[FieldSchema], index: int) -> None:
    if index < 0 or index >= len(fields):
        raise IndexError(f"Field index {index} out of range")


def append_field(
    fields: Sequence[FieldSchema], now: Optional[float] = None
) -> Tuple[FieldSchema, ...]:
    """Return a copy of ``fields`` with a new optional text field appended.

    The new field is named ``field_<milliseconds>``; the number is bumped
    until the name is unused in ``fields``.
    """
    stamp = int((time.time() if now is None else now) * 1000)
    taken = {f.name for f in fields}
    while f"field_{stamp}" in taken:
        stamp += 1

    new_field = FieldSchema(
        name=f"field_{stamp}",
        label=CUSTOM_FIELD_LABEL,
        required=False,
        type=FieldType.TEXT,
    )
    return tuple(fields) + (new_field,)


def replace_field(
    fields: Sequence[FieldSchema], index: int, schema: FieldSchema
) -> Tuple[FieldSchema, ...]:
    """Return a copy of ``fields`` with the field at ``index`` replaced."""
    _check_index(fields, index)
    for i, other in enumerate(fields):
        if i != index and other.name == schema.name:
            raise FieldNameConflictError(
                f"Another field is already named '{schema.name}'"
            )
    updated = list(fields)
    updated[index] = schema
    return tuple(updated)


def remove_field(fields: Sequence[FieldSchema], index: int) -> Tuple[FieldSchema, ...]:
    """Return a copy of ``fields`` without the field at ``index``."""
    _check_index(fields, index)
    if len(fields) <= 1:
        raise LastFieldError("At least one field required")
    return tuple(fields[:index]) + tuple(fields[index + 1 :])


class FieldSetEditor:
    """Admin-side editor for the registration fields of events"""

    def __init__(self, event_service: EventService, draft_manager: FieldDraftManager):
        self.event_service = event_service
        self.draft_manager = draft_manager

    def _require_event(self, event_id: uuid.UUID) -> Event:
        event = self.event_service.get_event(event_id)
        if not event:
            raise LookupError(f"Event {event_id} not found")
        return event

    def get_fields(self, event_id: uuid.UUID) -> Tuple[FieldSchema, ...]:
        """Current editing state: the draft if there is one, else the saved fields"""
        draft = self.draft_manager.get_draft(event_id)
        if draft is not None:
            return draft
        return self._require_event(event_id).field_schemas

    def has_draft(self, event_id: uuid.UUID) -> bool:
        return self.draft_manager.get_draft(event_id) is not None

    def _apply(
        self, event_id: uuid.UUID, fields: Tuple[FieldSchema, ...]
    ) -> Tuple[FieldSchema, ...]:
        self.draft_manager.set_draft(event_id, fields)
        return fields

    def add_field(self, event_id: uuid.UUID) -> Tuple[FieldSchema, ...]:
        return self._apply(event_id, append_field(self.get_fields(event_id)))

    def update_field(
        self, event_id: uuid.UUID, index: int, schema: FieldSchema
    ) -> Tuple[FieldSchema, ...]:
        return self._apply(
            event_id, replace_field(self.get_fields(event_id), index, schema)
        )

    def delete_field(self, event_id: uuid.UUID, index: int) -> Tuple[FieldSchema, ...]:
        return self._apply(event_id, remove_field(self.get_fields(event_id), index))

    def discard(self, event_id: uuid.UUID) -> None:
        """Throw away unsaved edits for an event"""
        self.draft_manager.clear_draft(event_id)

    def save(self, event_id: uuid.UUID) -> Event:
        """
        Persist the current field list as the event's schema

        Raises:
            ValueError: If the field list is empty
            LookupError: If the event does not exist
        """
        fields = self.get_fields(event_id)
        event = self.event_service.save_fields(event_id, fields)
        self.draft_manager.clear_draft(event_id)
        logger.info(f"Saved {len(fields)} fields for event {event_id}")
        return event
