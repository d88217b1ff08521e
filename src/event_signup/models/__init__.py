"""Database models for Event Signup"""

from event_signup.models.event import Event
from event_signup.models.field_schema import DEFAULT_FIELDS, FieldSchema
from event_signup.models.field_type import FieldType
from event_signup.models.registration import Registration, RegistrationSubmission

__all__ = [
    "Event",
    "Registration",
    "RegistrationSubmission",
    "FieldSchema",
    "FieldType",
    "DEFAULT_FIELDS",
]
