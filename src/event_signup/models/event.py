"""SQLModel Event model"""

import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from event_signup.models.field_schema import FieldSchema, parse_fields

DEFAULT_TEMPLATE = (
    '🎉 You\'re invited to "{eventName}" on {eventDate} at {location}!\n\n'
    "Confirmed attendees:\n{attendeeList}\n\nSee you there!"
)


class Event(SQLModel, table=True):
    """Event that attendees can register for"""

    __tablename__ = "events"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    event_date: date = Field(index=True)
    location: str = Field(default="")
    template: str = Field(default=DEFAULT_TEMPLATE)
    fields: Optional[List[dict]] = Field(
        default=None, sa_column=Column(JSON)
    )  # Ordered FieldSchema dicts
    is_active: bool = Field(default=True, index=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def field_schemas(self) -> Tuple[FieldSchema, ...]:
        """Registration fields for this event (defaults when none are stored)"""
        return parse_fields(self.fields)
