"""Admin panel: events, registration fields and attendee messages"""

import logging
import uuid
from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from event_signup.models.database import get_db, get_field_draft_manager
from event_signup.models.event import DEFAULT_TEMPLATE
from event_signup.models.field_schema import FieldSchema
from event_signup.models.field_type import FieldType
from event_signup.services.event_service import EventService
from event_signup.services.field_draft_manager import FieldDraftManager
from event_signup.services.field_set_editor import (
    FieldNameConflictError,
    FieldSetEditor,
)
from event_signup.services.message_composer import compose
from event_signup.services.registration_service import RegistrationService

router = APIRouter(prefix="/admin", tags=["Admin"])

template_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(template_dir))

logger = logging.getLogger(__name__)

FIELD_NAME_CHOICES = [
    ("name", "Full Name"),
    ("age", "Age"),
    ("mobile", "Mobile"),
    ("location", "Location"),
    ("occupation", "Occupation"),
    ("email", "Email"),
]


def get_field_set_editor(
    db: Session = Depends(get_db),
    draft_manager: FieldDraftManager = Depends(get_field_draft_manager),
) -> FieldSetEditor:
    return FieldSetEditor(EventService(db), draft_manager)


def _back_to_panel() -> RedirectResponse:
    return RedirectResponse(url="/admin", status_code=status.HTTP_303_SEE_OTHER)


def _edit_fields(operation, *args):
    """Run a field editor operation, mapping editor errors to HTTP errors"""
    try:
        return operation(*args)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except FieldNameConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", include_in_schema=False)
async def admin_panel(
    request: Request,
    db: Session = Depends(get_db),
    editor: FieldSetEditor = Depends(get_field_set_editor),
):
    """Render the admin panel with every event, its field editor and message preview"""
    event_service = EventService(db)
    registration_service = RegistrationService(db)

    panels = []
    for event in event_service.list_events():
        registrations = registration_service.get_registrations_for_event(event.id)
        panels.append(
            {
                "event": event,
                "fields": editor.get_fields(event.id),
                "has_draft": editor.has_draft(event.id),
                "registration_count": len(registrations),
                "message": compose(event, registrations),
            }
        )

    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "panels": panels,
            "default_template": DEFAULT_TEMPLATE,
            "field_types": list(FieldType),
            "field_name_choices": FIELD_NAME_CHOICES,
        },
    )


@router.post("/events")
async def create_event(
    name: str = Form(""),
    event_date: str = Form(""),
    location: str = Form(""),
    template: str = Form(""),
    db: Session = Depends(get_db),
):
    """Create an event with the default registration fields"""
    parsed_date = None
    if event_date:
        try:
            parsed_date = date.fromisoformat(event_date.strip()[:10])
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid event date")

    try:
        EventService(db).create_event(
            name=name,
            event_date=parsed_date,
            location=location,
            template=template or None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _back_to_panel()


@router.post("/events/{event_id}/delete")
async def delete_event(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    editor: FieldSetEditor = Depends(get_field_set_editor),
):
    """Delete an event and, through the database, its registrations"""
    try:
        EventService(db).delete_event(event_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    editor.discard(event_id)
    return _back_to_panel()


@router.post("/events/{event_id}/deactivate")
async def deactivate_event(event_id: uuid.UUID, db: Session = Depends(get_db)):
    """Stop an event from appearing on the public form"""
    try:
        EventService(db).deactivate_event(event_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _back_to_panel()


@router.get("/events/{event_id}/message", response_class=PlainTextResponse)
async def event_message(event_id: uuid.UUID, db: Session = Depends(get_db)):
    """Composed attendee message, ready to copy"""
    event = EventService(db).get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    registrations = RegistrationService(db).get_registrations_for_event(event_id)
    return PlainTextResponse(compose(event, registrations))


@router.post("/events/{event_id}/fields/add")
async def add_field(
    event_id: uuid.UUID, editor: FieldSetEditor = Depends(get_field_set_editor)
):
    _edit_fields(editor.add_field, event_id)
    return _back_to_panel()


@router.post("/events/{event_id}/fields/save")
async def save_fields(
    event_id: uuid.UUID, editor: FieldSetEditor = Depends(get_field_set_editor)
):
    """Persist the edited field list as the event's registration schema"""
    _edit_fields(editor.save, event_id)
    return _back_to_panel()


@router.post("/events/{event_id}/fields/discard")
async def discard_fields(
    event_id: uuid.UUID, editor: FieldSetEditor = Depends(get_field_set_editor)
):
    editor.discard(event_id)
    return _back_to_panel()


@router.post("/events/{event_id}/fields/{index:int}")
async def update_field(
    event_id: uuid.UUID,
    index: int,
    name: str = Form(...),
    label: str = Form(...),
    required: bool = Form(False),
    type: FieldType = Form(FieldType.TEXT),
    editor: FieldSetEditor = Depends(get_field_set_editor),
):
    """Replace the field at index with the submitted definition"""
    try:
        schema = FieldSchema(name=name, label=label, required=required, type=type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _edit_fields(editor.update_field, event_id, index, schema)
    return _back_to_panel()


@router.post("/events/{event_id}/fields/{index:int}/delete")
async def delete_field(
    event_id: uuid.UUID,
    index: int,
    editor: FieldSetEditor = Depends(get_field_set_editor),
):
    _edit_fields(editor.delete_field, event_id, index)
    return _back_to_panel()
