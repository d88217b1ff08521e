"""Enums for the application"""

from enum import Enum


class FieldType(str, Enum):
    """Enum for registration field input types"""

    TEXT = "text"
    NUMBER = "number"
    TEL = "tel"
    EMAIL = "email"
