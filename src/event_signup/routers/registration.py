"""Public registration form endpoints"""

import logging
import uuid
from datetime import date
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field
from sqlmodel import Session

from event_signup.models.database import get_db
from event_signup.models.event import Event
from event_signup.models.field_schema import FieldSchema
from event_signup.services.dynamic_form import (
    DEFAULT_GROUP_SIZE,
    MAX_GROUP_SIZE,
    MIN_GROUP_SIZE,
    DynamicFormModel,
    RegistrationValidationError,
)
from event_signup.services.event_service import EventService
from event_signup.services.registration_service import RegistrationService

router = APIRouter(tags=["Registration"])

# Get template directory relative to this file
template_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(template_dir))

logger = logging.getLogger(__name__)


class EventSummary(BaseModel):
    id: uuid.UUID
    name: str
    event_date: date
    location: str
    fields: List[FieldSchema] = Field(..., description="Fields to fill per person")


class RegistrationResponse(BaseModel):
    success: bool
    message: str
    registration_id: str


def _parse_event_id(raw: Optional[str]) -> Optional[uuid.UUID]:
    if not raw:
        return None
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


def _find_event(events: List[Event], event_id: Optional[uuid.UUID]) -> Optional[Event]:
    return next((e for e in events if e.id == event_id), None)


@router.get("/events", response_model=List[EventSummary])
async def list_active_events(db: Session = Depends(get_db)):
    """Events currently accepting registrations, with their field schemas"""
    events = EventService(db).list_events(active_only=True)
    return [
        EventSummary(
            id=event.id,
            name=event.name,
            event_date=event.event_date,
            location=event.location,
            fields=list(event.field_schemas),
        )
        for event in events
    ]


@router.get("/", include_in_schema=False)
async def serve_registration_form(request: Request, db: Session = Depends(get_db)):
    """Serve the registration page; query parameters carry the form state"""
    params = request.query_params
    events = EventService(db).list_events(active_only=True)
    selected_event = _find_event(events, _parse_event_id(params.get("event_id")))

    errors: List[str] = []
    if selected_event:
        try:
            form_model = DynamicFormModel.from_form_data(
                selected_event.field_schemas, selected_event.id, params
            )
        except RegistrationValidationError as e:
            errors = e.errors
            # Keep the group toggle and entered values, fall back to the default size
            fallback = dict(params)
            fallback["group_size"] = str(DEFAULT_GROUP_SIZE)
            form_model = DynamicFormModel.from_form_data(
                selected_event.field_schemas, selected_event.id, fallback
            )
    else:
        form_model = DynamicFormModel()

    notice = "Registration saved!" if params.get("registered") else None

    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "events": events,
            "selected_event": selected_event,
            "form_model": form_model,
            "errors": errors,
            "notice": notice,
            "min_group_size": MIN_GROUP_SIZE,
            "max_group_size": MAX_GROUP_SIZE,
        },
    )


@router.post("/register", response_model=RegistrationResponse)
async def submit_registration(request: Request, db: Session = Depends(get_db)):
    """Handle registration form submission"""

    event_service = EventService(db)
    registration_service = RegistrationService(db)

    form_data = await request.form()

    event_id = _parse_event_id(form_data.get("event_id"))
    if event_id is None:
        raise HTTPException(status_code=400, detail="Please select an event")

    event = event_service.get_event(event_id)
    if not event or not event.is_active:
        raise HTTPException(
            status_code=404, detail="Event not found or not accepting registrations"
        )

    try:
        form_model = DynamicFormModel.from_form_data(
            event.field_schemas, event.id, form_data
        )
        submission = form_model.to_submission()
    except RegistrationValidationError as e:
        logger.info(f"Rejected registration for event {event_id}: {e.errors}")
        raise HTTPException(
            status_code=400,
            detail={"message": "Please fix the highlighted fields", "errors": e.errors},
        )

    try:
        registration = registration_service.create_registration(submission)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating registration: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=500, detail="Registration failed. Please try again."
        )

    return RegistrationResponse(
        success=True,
        message="Registration saved!",
        registration_id=str(registration.id),
    )
