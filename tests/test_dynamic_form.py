"""Tests for the dynamic registration form model"""

import uuid

import pytest

from event_signup.models.field_schema import DEFAULT_FIELDS, FieldSchema
from event_signup.models.field_type import FieldType
from event_signup.services.dynamic_form import (
    DEFAULT_GROUP_SIZE,
    DynamicFormModel,
    RegistrationValidationError,
)

EVENT_ID = uuid.uuid4()

FIELDS = (
    FieldSchema(name="name", label="Full Name", required=True),
    FieldSchema(name="age", label="Age", required=True, type=FieldType.NUMBER),
    FieldSchema(name="notes", label="Notes", required=False),
)


@pytest.fixture
def form_model():
    return DynamicFormModel(fields=FIELDS, event_id=EVENT_ID)


class TestGroupToggle:
    """Slot count follows the group toggle and size"""

    def test_starts_with_single_slot(self, form_model):
        assert form_model.is_group is False
        assert len(form_model.slots) == 1
        assert form_model.slots[0].fields == FIELDS
        assert form_model.slots[0].label == "Person 1"

    def test_toggle_on_expands_to_default_size(self, form_model):
        form_model.set_group(True)

        assert form_model.group_size == DEFAULT_GROUP_SIZE
        assert len(form_model.slots) == 2

    def test_toggle_on_keeps_first_slot_data(self, form_model):
        form_model.set_value(0, "name", "Ana")
        form_model.set_group(True)

        assert form_model.slots[0].values == {"name": "Ana"}
        assert form_model.slots[1].values == {}

    def test_toggle_off_collapses_to_one_empty_slot(self, form_model):
        form_model.set_group(True)
        form_model.set_group_size(5)
        form_model.set_value(0, "name", "Ana")
        form_model.set_value(4, "name", "Ben")

        form_model.set_group(False)

        assert form_model.group_size == DEFAULT_GROUP_SIZE
        assert len(form_model.slots) == 1
        assert form_model.slots[0].values == {}

    def test_toggle_off_then_on_yields_two_empty_slots(self, form_model):
        form_model.set_group(True)
        form_model.set_group_size(7)
        form_model.set_value(1, "name", "Ben")

        form_model.set_group(False)
        form_model.set_group(True)

        assert form_model.group_size == 2
        assert [slot.values for slot in form_model.slots] == [{}, {}]

    def test_group_size_changes_keep_surviving_slots(self, form_model):
        form_model.set_group(True)
        form_model.set_value(0, "name", "Ana")
        form_model.set_value(1, "name", "Ben")

        form_model.set_group_size(4)
        assert len(form_model.slots) == 4
        assert form_model.slots[1].values == {"name": "Ben"}
        assert form_model.slots[3].values == {}

        form_model.set_value(3, "name", "Dee")
        form_model.set_group_size(3)
        assert len(form_model.slots) == 3
        assert [s.values.get("name") for s in form_model.slots] == ["Ana", "Ben", None]

    def test_slot_count_matches_any_toggle_sequence(self, form_model):
        for is_group, size in [(True, 3), (True, 10), (False, 6), (True, 2), (True, 9)]:
            form_model.set_group(is_group)
            form_model.set_group_size(size)
            expected = form_model.group_size if form_model.is_group else 1
            assert len(form_model.slots) == expected

    def test_group_size_ignored_when_individual(self, form_model):
        form_model.set_group_size(6)

        assert form_model.group_size == DEFAULT_GROUP_SIZE
        assert len(form_model.slots) == 1

    def test_group_size_below_one_rejected(self, form_model):
        form_model.set_group(True)
        with pytest.raises(ValueError):
            form_model.set_group_size(0)

    def test_reset(self, form_model):
        form_model.set_group(True)
        form_model.set_value(0, "name", "Ana")

        form_model.reset()

        assert form_model.is_group is False
        assert [slot.values for slot in form_model.slots] == [{}]
        assert form_model.event_id == EVENT_ID


class TestValidation:
    """Validation of collected values"""

    def test_event_must_be_selected(self):
        form_model = DynamicFormModel()
        assert form_model.validate() == ["Please select an event"]

    def test_required_fields_per_slot(self, form_model):
        form_model.set_group(True)
        form_model.set_value(0, "name", "Ana")
        form_model.set_value(0, "age", "30")
        form_model.set_value(1, "name", "   ")

        errors = form_model.validate()

        assert errors == [
            "Person 2: Full Name is required",
            "Person 2: Age is required",
        ]

    def test_number_fields_must_parse(self, form_model):
        form_model.set_value(0, "name", "Ana")
        form_model.set_value(0, "age", "thirty")

        assert form_model.validate() == ["Person 1: Age must be a valid number"]

    @pytest.mark.parametrize("age", ["1_000", "3_0.5", "nan", "inf"])
    def test_number_fields_reject_python_only_literals(self, form_model, age):
        form_model.set_value(0, "name", "Ana")
        form_model.set_value(0, "age", age)

        assert form_model.validate() == ["Person 1: Age must be a valid number"]

    def test_group_size_out_of_range_rejected(self, form_model):
        form_model.set_group(True)
        form_model.set_group_size(12)
        for i in range(12):
            form_model.set_value(i, "name", f"Guest {i}")
            form_model.set_value(i, "age", 20)

        with pytest.raises(RegistrationValidationError) as exc_info:
            form_model.to_submission()

        assert exc_info.value.errors == ["Group size must be between 2 and 10"]

    def test_select_event_binds_schema(self):
        form_model = DynamicFormModel()
        form_model.set_value(0, "name", "Ana")

        form_model.select_event(EVENT_ID, DEFAULT_FIELDS)

        assert form_model.event_id == EVENT_ID
        assert form_model.slots[0].fields == DEFAULT_FIELDS
        assert form_model.slots[0].values == {"name": "Ana"}


class TestSubmission:
    """Building the registration payload"""

    def test_individual_submission(self, form_model):
        form_model.set_value(0, "name", "  Ana ")
        form_model.set_value(0, "age", "30")
        form_model.set_value(0, "notes", "")

        submission = form_model.to_submission()

        assert submission.event_id == EVENT_ID
        assert submission.is_group is False
        assert submission.group_size == 1
        assert submission.people == [{"name": "Ana", "age": 30}]

    def test_group_submission(self, form_model):
        form_model.set_group(True)
        form_model.set_group_size(3)
        for i, (name, age) in enumerate([("Ana", "30"), ("Ben", "4.5"), ("Cy", "61")]):
            form_model.set_value(i, "name", name)
            form_model.set_value(i, "age", age)

        submission = form_model.to_submission()

        assert submission.is_group is True
        assert submission.group_size == 3
        assert len(submission.people) == 3
        assert submission.people[1] == {"name": "Ben", "age": 4.5}

    def test_unknown_keys_are_dropped(self, form_model):
        form_model.set_value(0, "name", "Ana")
        form_model.set_value(0, "age", 30)
        form_model.set_value(0, "eventId", "spoofed")

        assert form_model.to_submission().people == [{"name": "Ana", "age": 30}]


class TestFromFormData:
    """Rebuilding the model from posted form data"""

    def test_group_form_data(self):
        data = {
            "is_group": "true",
            "group_size": "2",
            "people.0.name": "Ana",
            "people.0.age": "30",
            "people.1.name": "Ben",
            "people.1.age": "31",
            "people.2.name": "Ignored",
        }

        form_model = DynamicFormModel.from_form_data(FIELDS, EVENT_ID, data)

        assert form_model.is_group is True
        assert len(form_model.slots) == 2
        assert form_model.to_submission().people == [
            {"name": "Ana", "age": 30},
            {"name": "Ben", "age": 31},
        ]

    def test_individual_form_data(self):
        data = {"people.0.name": "Ana", "people.0.age": "30", "group_size": "5"}

        form_model = DynamicFormModel.from_form_data(FIELDS, EVENT_ID, data)

        assert form_model.is_group is False
        assert len(form_model.slots) == 1

    @pytest.mark.parametrize("group_size", ["12", "1", "abc"])
    def test_invalid_group_size_rejected(self, group_size):
        data = {"is_group": "on", "group_size": group_size}

        with pytest.raises(RegistrationValidationError):
            DynamicFormModel.from_form_data(FIELDS, EVENT_ID, data)
