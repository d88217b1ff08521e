"""Dynamic registration form model.

Derives the per-person input slots for the public form from an event's
field schema and the group toggle, keeps the slot count in step with the
group size, and validates the collected values into a submission.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from event_signup.models.field_schema import FieldSchema
from event_signup.models.field_type import FieldType
from event_signup.models.registration import (
    DEFAULT_GROUP_SIZE,
    MAX_GROUP_SIZE,
    MIN_GROUP_SIZE,
    RegistrationSubmission,
)

logger = logging.getLogger(__name__)


_TRUTHY = {"true", "on", "1", "yes"}


class RegistrationValidationError(ValueError):
    """Raised when a registration cannot be submitted as entered"""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class Slot:
    """One person's worth of inputs on the registration form"""

    index: int
    fields: Tuple[FieldSchema, ...]
    values: Dict[str, Any]

    @property
    def label(self) -> str:
        return f"Person {self.index + 1}"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_number(value: Any) -> Optional[float | int]:
    """Parse a numeric input, returning None when it is not a finite number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    # int()/float() accept digit separators; number inputs never send them
    if "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class DynamicFormModel:
    """Form state for one registration: selected event, group toggle and slots"""

    def __init__(
        self,
        fields: Optional[Sequence[FieldSchema]] = None,
        event_id: Optional[uuid.UUID] = None,
    ):
        self.event_id = event_id
        self.fields: Tuple[FieldSchema, ...] = tuple(fields or ())
        self.is_group = False
        self.group_size = DEFAULT_GROUP_SIZE
        self._people: List[Dict[str, Any]] = [{}]

    @classmethod
    def from_form_data(
        cls,
        fields: Sequence[FieldSchema],
        event_id: Optional[uuid.UUID],
        data: Mapping[str, Any],
    ) -> "DynamicFormModel":
        """
        Rebuild form state from posted form data.

        Expects ``is_group``, ``group_size`` and ``people.<i>.<field name>``
        keys. Values for slots beyond the group size are ignored.

        Raises:
            RegistrationValidationError: If the group size is not a whole
                number within range
        """
        model = cls(fields=fields, event_id=event_id)

        is_group = str(data.get("is_group") or "").strip().lower() in _TRUTHY
        model.set_group(is_group)

        if is_group:
            raw_size = str(data.get("group_size") or DEFAULT_GROUP_SIZE).strip()
            try:
                size = int(raw_size)
            except ValueError:
                size = None
            if size is None or not MIN_GROUP_SIZE <= size <= MAX_GROUP_SIZE:
                raise RegistrationValidationError(
                    [
                        f"Group size must be a whole number between "
                        f"{MIN_GROUP_SIZE} and {MAX_GROUP_SIZE}"
                    ]
                )
            model.set_group_size(size)

        for index in range(len(model._people)):
            for field in model.fields:
                value = data.get(f"people.{index}.{field.name}")
                if value is not None:
                    model.set_value(index, field.name, value)

        return model

    @property
    def slots(self) -> List[Slot]:
        return [
            Slot(index=i, fields=self.fields, values=dict(person))
            for i, person in enumerate(self._people)
        ]

    def select_event(self, event_id: uuid.UUID, fields: Sequence[FieldSchema]) -> None:
        """Bind the form to an event's schema; entered values are kept"""
        self.event_id = event_id
        self.fields = tuple(fields)

    def set_group(self, is_group: bool) -> None:
        if is_group == self.is_group:
            return
        self.is_group = is_group
        self.group_size = DEFAULT_GROUP_SIZE
        if is_group:
            self._sync_slots(self.group_size)
        else:
            self._people = [{}]

    def set_group_size(self, size: int) -> None:
        """
        Change the group size, appending empty slots or dropping trailing ones.

        Ignored while registering individually. Sizes outside the allowed
        range are kept and reported by validate().

        Raises:
            ValueError: If size is below 1
        """
        if not self.is_group:
            return
        if size < 1:
            raise ValueError("Group size must be at least 1")
        self.group_size = size
        self._sync_slots(size)

    def _sync_slots(self, count: int) -> None:
        current = len(self._people)
        if count > current:
            self._people.extend({} for _ in range(count - current))
        elif count < current:
            del self._people[count:]

    def set_value(self, slot_index: int, field_name: str, value: Any) -> None:
        if slot_index < 0 or slot_index >= len(self._people):
            raise IndexError(f"Slot {slot_index} out of range")
        self._people[slot_index][field_name] = value

    def reset(self) -> None:
        """Return to a blank individual registration for the same event"""
        self.is_group = False
        self.group_size = DEFAULT_GROUP_SIZE
        self._people = [{}]

    def validate(self) -> List[str]:
        """Return a list of problems preventing submission (empty when valid)"""
        if self.event_id is None:
            return ["Please select an event"]

        errors = []
        if self.is_group and not MIN_GROUP_SIZE <= self.group_size <= MAX_GROUP_SIZE:
            errors.append(
                f"Group size must be between {MIN_GROUP_SIZE} and {MAX_GROUP_SIZE}"
            )

        for slot in self.slots:
            for field in slot.fields:
                value = slot.values.get(field.name)
                if _is_blank(value):
                    if field.required:
                        errors.append(f"{slot.label}: {field.label} is required")
                    continue
                if field.type == FieldType.NUMBER and _parse_number(value) is None:
                    errors.append(f"{slot.label}: {field.label} must be a valid number")

        return errors

    def to_submission(self) -> RegistrationSubmission:
        """
        Build the registration payload from the current state.

        Raises:
            RegistrationValidationError: If validate() reports any problem
        """
        errors = self.validate()
        if errors:
            raise RegistrationValidationError(errors)

        people = [self._collect(slot) for slot in self.slots]
        return RegistrationSubmission(
            event_id=self.event_id,
            is_group=self.is_group,
            group_size=self.group_size if self.is_group else 1,
            people=people,
        )

    def _collect(self, slot: Slot) -> Dict[str, Any]:
        person: Dict[str, Any] = {}
        for field in slot.fields:
            value = slot.values.get(field.name)
            if _is_blank(value):
                continue
            if field.type == FieldType.NUMBER:
                person[field.name] = _parse_number(value)
            elif isinstance(value, str):
                person[field.name] = value.strip()
            else:
                person[field.name] = value
        return person
