"""SQLModel Registration model and the submission payload that creates it"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, model_validator
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

DEFAULT_GROUP_SIZE = 2
MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 10


class Registration(SQLModel, table=True):
    """One submission for an event, covering one or more attendees"""

    __tablename__ = "registrations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    event_id: uuid.UUID = Field(
        foreign_key="events.id", ondelete="CASCADE", index=True
    )
    is_group: bool = Field(default=False)
    group_size: int = Field(default=1)
    people: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    timestamp: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class RegistrationSubmission(BaseModel):
    """Validated registration data ready to be persisted

    - is_group: group registrations carry MIN_GROUP_SIZE..MAX_GROUP_SIZE people
    - group_size: 1 for individual registrations
    - people: exactly group_size attendee maps
    """

    event_id: uuid.UUID
    is_group: bool
    group_size: int
    people: List[Dict[str, Any]]

    @model_validator(mode="after")
    def _validate_group(self) -> "RegistrationSubmission":
        if self.is_group:
            if not MIN_GROUP_SIZE <= self.group_size <= MAX_GROUP_SIZE:
                raise ValueError(
                    f"Group size must be between {MIN_GROUP_SIZE} and {MAX_GROUP_SIZE}"
                )
        elif self.group_size != 1:
            raise ValueError("Individual registrations must have a group size of 1")
        if len(self.people) != self.group_size:
            raise ValueError(
                f"Expected {self.group_size} attendee(s), got {len(self.people)}"
            )
        return self
