"""Registration service for handling form submissions"""

import logging
import uuid

from sqlmodel import Session, select

from event_signup.models.event import Event
from event_signup.models.registration import Registration, RegistrationSubmission

logger = logging.getLogger(__name__)


class RegistrationService:
    """Service for managing event registrations"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def create_registration(self, submission: RegistrationSubmission) -> Registration:
        """
        Create a new registration for an event.

        Args:
            submission: Validated registration payload

        Returns:
            Registration: The created registration

        Raises:
            ValueError: If the event doesn't exist or is inactive
        """
        event_stmt = select(Event).where(
            Event.id == submission.event_id,
            Event.is_active == True,  # noqa: E712
        )
        event = self.db.exec(event_stmt).first()

        if not event:
            raise ValueError("Event not found or not accepting registrations")

        registration = Registration(
            event_id=submission.event_id,
            is_group=submission.is_group,
            group_size=submission.group_size,
            people=[dict(person) for person in submission.people],
        )

        self.db.add(registration)
        self.db.commit()
        self.db.refresh(registration)

        logger.info(
            f"Created registration {registration.id} for event {submission.event_id} "
            f"({len(registration.people)} attendee(s))"
        )
        return registration

    def get_registrations_for_event(self, event_id: uuid.UUID) -> list[Registration]:
        """Get all registrations for an event, oldest first"""
        stmt = (
            select(Registration)
            .where(Registration.event_id == event_id)
            .order_by(Registration.timestamp)
        )
        return list(self.db.exec(stmt).all())

    def get_registration_count_for_event(self, event_id: uuid.UUID) -> int:
        """Get the total number of registrations for an event"""
        return len(self.get_registrations_for_event(event_id))
