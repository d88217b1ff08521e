"""Tests for event service functionality"""

import uuid
from datetime import date

import pytest

from event_signup.models.event import DEFAULT_TEMPLATE
from event_signup.models.field_schema import DEFAULT_FIELDS, FieldSchema
from event_signup.models.registration import RegistrationSubmission


class TestEventService:
    """Test event service functionality"""

    def test_create_event_defaults(self, event_service):
        event = event_service.create_event(
            name="  Launch ", event_date=date(2025, 3, 1), location="HQ"
        )

        assert event.id is not None
        assert event.name == "Launch"
        assert event.is_active is True
        assert event.template == DEFAULT_TEMPLATE
        assert event.field_schemas == DEFAULT_FIELDS
        assert event.created_at is not None

    @pytest.mark.parametrize(
        "name, event_date", [("", date(2025, 3, 1)), ("Launch", None), ("   ", None)]
    )
    def test_create_event_requires_name_and_date(self, event_service, name, event_date):
        with pytest.raises(ValueError, match="Name & date required"):
            event_service.create_event(name=name, event_date=event_date)

        assert event_service.list_events() == []

    def test_missing_fields_fall_back_to_defaults(self, event_service, sample_event):
        sample_event.fields = None

        assert sample_event.field_schemas == DEFAULT_FIELDS

    def test_list_active_events(self, event_service):
        first = event_service.create_event(name="One", event_date=date(2025, 1, 1))
        second = event_service.create_event(name="Two", event_date=date(2025, 2, 1))

        event_service.deactivate_event(first.id)

        assert [e.id for e in event_service.list_events()] == [first.id, second.id]
        assert [e.id for e in event_service.list_events(active_only=True)] == [
            second.id
        ]

    def test_save_fields_replaces_list(self, event_service, sample_event):
        fields = [FieldSchema(name="email", label="Email", required=True, type="email")]

        event_service.save_fields(sample_event.id, fields)

        assert event_service.get_event(sample_event.id).field_schemas == tuple(fields)

    def test_save_fields_unknown_event(self, event_service):
        with pytest.raises(LookupError):
            event_service.save_fields(uuid.uuid4(), DEFAULT_FIELDS)

    def test_delete_event(self, event_service, sample_event):
        event_service.delete_event(sample_event.id)

        assert event_service.get_event(sample_event.id) is None
        with pytest.raises(LookupError):
            event_service.delete_event(sample_event.id)

    def test_delete_event_removes_its_registrations(
        self, event_service, registration_service, sample_event
    ):
        other = event_service.create_event(name="Other", event_date=date(2025, 4, 1))
        for event in (sample_event, other):
            registration_service.create_registration(
                RegistrationSubmission(
                    event_id=event.id,
                    is_group=False,
                    group_size=1,
                    people=[{"name": "Ana"}],
                )
            )

        event_service.delete_event(sample_event.id)

        assert registration_service.get_registrations_for_event(sample_event.id) == []
        assert registration_service.get_registration_count_for_event(sample_event.id) == 0
        assert len(registration_service.get_registrations_for_event(other.id)) == 1
