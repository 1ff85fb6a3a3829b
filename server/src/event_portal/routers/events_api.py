"""JSON endpoints for reading and writing events"""

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from sqlmodel import Session

from event_portal.auth.dependencies import require_admin_api
from event_portal.auth.models import User
from event_portal.logging_config import get_logger
from event_portal.models.database import get_db
from event_portal.models.event import as_utc
from event_portal.models.form_field import FormFieldDefinition
from event_portal.services.event_service import EventService

router = APIRouter(prefix="/api/events", tags=["Events"])
logger = get_logger(__name__)


class EventPayload(BaseModel):
    title: str = Field(..., min_length=1, description="Event title")
    description: Optional[str] = ""
    event_date: Optional[datetime] = None
    registration_start: Optional[datetime] = None
    registration_end: Optional[datetime] = None
    is_active: bool = True
    registration_open: bool = True
    banner_url: Optional[str] = ""
    form_fields: List[FormFieldDefinition] = Field(default_factory=list)

    @field_validator("event_date", "registration_start", "registration_end")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Times without an offset are taken as UTC
        return as_utc(value)


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


@router.get("")
async def list_events(db: Session = Depends(get_db)):
    """List active events"""
    events = EventService(db).list_events(active_only=True)
    return {"success": True, "events": [event.to_payload() for event in events]}


@router.get("/{event_id}")
async def get_event(event_id: uuid.UUID, db: Session = Depends(get_db)):
    """Get a single event with its registration form"""
    event = EventService(db).get_event(event_id)
    if not event:
        return _failure(status.HTTP_404_NOT_FOUND, "Event not found")
    return {"success": True, "event": event.to_payload()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventPayload,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin_api),
):
    """Create an event. Its registration form starts empty."""
    result = EventService(db).create_event(payload.model_dump(exclude={"form_fields"}))
    if not result["success"]:
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, result["error"])

    logger.info(f"Admin {admin.user_id} created event {result['event'].id}")
    return {"success": True, "event": result["event"].to_payload()}


@router.put("/{event_id}")
async def update_event(
    event_id: uuid.UUID,
    payload: EventPayload,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin_api),
):
    """Replace an event with the full payload, including its form fields"""
    result = EventService(db).update_event(event_id, payload.model_dump())
    if not result["success"]:
        status_code = (
            status.HTTP_404_NOT_FOUND
            if result["error"] == "Event not found"
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return _failure(status_code, result["error"])

    logger.info(f"Admin {admin.user_id} updated event {event_id}")
    return {"success": True, "event": result["event"].to_payload()}
