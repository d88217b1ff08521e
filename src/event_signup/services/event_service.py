"""Event Service - Handles event database operations"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Sequence

from sqlmodel import Session, select

from event_signup.models.event import DEFAULT_TEMPLATE, Event
from event_signup.models.field_schema import DEFAULT_FIELDS, FieldSchema, dump_fields

logger = logging.getLogger(__name__)


class EventService:
    """Service for handling event operations"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def create_event(
        self,
        name: str,
        event_date: Optional[date],
        location: str = "",
        template: Optional[str] = None,
    ) -> Event:
        """
        Create a new active event with the default registration fields

        Args:
            name: Event name
            event_date: Calendar date of the event
            location: Optional location text
            template: Message template, defaults to DEFAULT_TEMPLATE

        Returns:
            The created Event

        Raises:
            ValueError: If name or date is missing
        """
        name = (name or "").strip()
        if not name or not event_date:
            raise ValueError("Name & date required")

        event = Event(
            name=name,
            event_date=event_date,
            location=(location or "").strip(),
            template=template or DEFAULT_TEMPLATE,
            fields=dump_fields(DEFAULT_FIELDS),
            is_active=True,
        )

        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        logger.info(f"Event created successfully: {event.id}")
        return event

    def get_event(self, event_id: uuid.UUID) -> Optional[Event]:
        """Get an event by ID"""
        return self.db.get(Event, event_id)

    def list_events(self, active_only: bool = False) -> List[Event]:
        """
        List events in creation order

        Args:
            active_only: Only return events still accepting registrations
        """
        stmt = select(Event)
        if active_only:
            stmt = stmt.where(Event.is_active == True)  # noqa: E712
        stmt = stmt.order_by(Event.created_at)
        return list(self.db.exec(stmt).all())

    def save_fields(self, event_id: uuid.UUID, fields: Sequence[FieldSchema]) -> Event:
        """
        Replace an event's registration fields in a single write

        Raises:
            ValueError: If fields is empty
            LookupError: If the event does not exist
        """
        if not fields:
            raise ValueError("At least one field required")

        event = self.get_event(event_id)
        if not event:
            raise LookupError(f"Event {event_id} not found")

        event.fields = dump_fields(fields)

        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        logger.info(f"Updated fields for event {event_id}")
        return event

    def deactivate_event(self, event_id: uuid.UUID) -> Event:
        """Hide an event from the public registration form"""
        event = self.get_event(event_id)
        if not event:
            raise LookupError(f"Event {event_id} not found")

        event.is_active = False

        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        logger.info(f"Event deactivated: {event_id}")
        return event

    def delete_event(self, event_id: uuid.UUID) -> None:
        """Delete an event; its registrations go with it via ON DELETE CASCADE"""
        event = self.get_event(event_id)
        if not event:
            raise LookupError(f"Event {event_id} not found")

        self.db.delete(event)
        self.db.commit()

        logger.info(f"Event deleted: {event_id}")
