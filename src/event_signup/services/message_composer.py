"""Message composer: renders an event's template with its attendee list"""

from datetime import date
from typing import Any, Iterable, List, Mapping

NO_REGISTRATIONS = "No registrations yet."
MISSING_NAME = "—"
MISSING_LOCATION = "TBD"

# Registration-level keys that never belong in a person's details
REGISTRATION_KEYS = frozenset(
    {
        "eventId",
        "isGroup",
        "groupSize",
        "timestamp",
        "event_id",
        "is_group",
        "group_size",
    }
)


def format_event_date(event_date: date) -> str:
    """Long date such as 'Saturday, March 1, 2025'"""
    return event_date.strftime("%A, %B %d, %Y").replace(" 0", " ")


def format_attendee(position: int, person: Mapping[str, Any]) -> str:
    """Render one attendee line, e.g. '1. Ana (age: 30)'"""
    name = person.get("name")
    heading = f"{position}. {name if name not in (None, '') else MISSING_NAME}"
    details = ", ".join(
        f"{key}: {value}"
        for key, value in person.items()
        if key != "name" and key not in REGISTRATION_KEYS
    )
    return f"{heading} ({details})" if details else heading


def attendee_list(registrations: Iterable[Any]) -> str:
    people: List[Mapping[str, Any]] = [
        person for registration in registrations for person in (registration.people or [])
    ]
    if not people:
        return NO_REGISTRATIONS
    return "\n".join(format_attendee(i + 1, person) for i, person in enumerate(people))


def compose(event: Any, registrations: Iterable[Any]) -> str:
    """
    Render the shareable message for an event.

    Each placeholder ({eventName}, {eventDate}, {location}, {attendeeList})
    is replaced at its first occurrence only; placeholders missing from the
    template are skipped.

    Args:
        event: Event with name, event_date, location and template
        registrations: Registrations for the event in retrieval order

    Returns:
        The composed message text
    """
    return (
        event.template.replace("{eventName}", event.name, 1)
        .replace("{eventDate}", format_event_date(event.event_date), 1)
        .replace("{location}", event.location or MISSING_LOCATION, 1)
        .replace("{attendeeList}", attendee_list(registrations), 1)
    )
