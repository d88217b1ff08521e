"""Registration field schema and the shared default field set"""

from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from event_signup.models.field_type import FieldType


class FieldSchema(BaseModel):
    """One attendee attribute collected by an event's registration form"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Key used in each attendee's data")
    label: str = Field(..., description="Text shown next to the input")
    required: bool = False
    type: FieldType = FieldType.TEXT

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field name must not be empty")
        return v


DEFAULT_FIELDS: Tuple[FieldSchema, ...] = (
    FieldSchema(name="name", label="Full Name", required=True, type=FieldType.TEXT),
    FieldSchema(name="age", label="Age", required=True, type=FieldType.NUMBER),
    FieldSchema(
        name="mobile", label="Mobile Number", required=True, type=FieldType.TEL
    ),
    FieldSchema(name="location", label="Location", required=True, type=FieldType.TEXT),
    FieldSchema(
        name="occupation", label="Occupation", required=True, type=FieldType.TEXT
    ),
)


def parse_fields(raw: Optional[Iterable[dict]]) -> Tuple[FieldSchema, ...]:
    """Build FieldSchema values from stored dicts, falling back to DEFAULT_FIELDS"""
    if not raw:
        return DEFAULT_FIELDS
    return tuple(FieldSchema.model_validate(item) for item in raw)


def dump_fields(fields: Iterable[FieldSchema]) -> List[dict]:
    """Serialize fields to JSON-ready dicts"""
    return [field.model_dump(mode="json") for field in fields]
