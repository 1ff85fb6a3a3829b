"""Admin console: event management and participant lists"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlmodel import Session
from starlette.datastructures import FormData, UploadFile

from event_portal.auth.admin_gate import AdminStatusWatcher
from event_portal.auth.dependencies import get_admin_status, get_navigation, require_admin
from event_portal.auth.models import User
from event_portal.backends.banner_storage import BannerStorage
from event_portal.config import config
from event_portal.exceptions import BannerUploadError
from event_portal.logging_config import get_logger
from event_portal.models.database import get_db
from event_portal.routers.templating import templates
from event_portal.services.event_service import EventService
from event_portal.services.navigation import NavLink
from event_portal.services.participant_service import ParticipantService
from event_portal.services.response_reconciliation import (
    FIXED_COLUMNS,
    build_columns,
    build_rows,
    export_csv,
    find_unmatched_keys,
)

router = APIRouter(prefix="/admin", tags=["Admin"], include_in_schema=False)
logger = get_logger(__name__)

BANNER_MODE_URL = "url"
BANNER_MODE_UPLOAD = "upload"


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name and the exact UTF-8 name"""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    # Control characters (CR, LF, tab) must never reach the header
    fallback = "".join(char if " " <= char < "\x7f" else "_" for char in fallback)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def get_banner_storage() -> BannerStorage:
    return BannerStorage(config["banner_storage_dir"], config["banner_public_prefix"])


def parse_datetime_local(raw_value: Optional[str]) -> Optional[datetime]:
    """Read an <input type="datetime-local"> value (YYYY-MM-DDTHH:MM) as UTC"""
    if not raw_value:
        return None
    return datetime.strptime(raw_value, "%Y-%m-%dT%H:%M").replace(tzinfo=timezone.utc)


def _event_details_from_form(form_data: FormData) -> dict:
    """
    Event metadata from the create/edit form.

    Raises:
        ValueError: If the title is missing or a date cannot be parsed
    """
    title = (form_data.get("title") or "").strip()
    if not title:
        raise ValueError("Event title is required")

    return {
        "title": title,
        "description": (form_data.get("description") or "").strip(),
        "event_date": parse_datetime_local(form_data.get("event_date")),
        "registration_start": parse_datetime_local(form_data.get("registration_start")),
        "registration_end": parse_datetime_local(form_data.get("registration_end")),
        "is_active": form_data.get("is_active") is not None,
        "registration_open": form_data.get("registration_open") is not None,
    }


async def _resolve_banner_url(
    form_data: FormData, storage: BannerStorage, current_url: str = ""
) -> str:
    """
    Banner URL from either the upload field or the URL field, per banner_mode.

    Raises:
        BannerUploadError: If the uploaded file is rejected
    """
    mode = form_data.get("banner_mode") or BANNER_MODE_URL
    if mode == BANNER_MODE_UPLOAD:
        banner_file = form_data.get("banner_file")
        if isinstance(banner_file, UploadFile) and banner_file.filename:
            path = storage.upload(banner_file.filename, await banner_file.read())
            return storage.public_url(path)
        return current_url
    return (form_data.get("banner_url") or "").strip()


@router.get("/login")
async def admin_login(
    request: Request,
    watcher: AdminStatusWatcher = Depends(get_admin_status),
    nav: List[NavLink] = Depends(get_navigation),
):
    """Admin sign-in page; admins who are already signed in go straight in"""
    if watcher.status.is_admin:
        return RedirectResponse(url="/admin/events", status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(
        request,
        "admin/login.html",
        {"nav": nav, "signed_in": watcher.status.user is not None},
    )


@router.get("/events")
async def admin_events(
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    watcher: AdminStatusWatcher = Depends(get_admin_status),
    nav: List[NavLink] = Depends(get_navigation),
):
    events = EventService(db).list_events()
    counts = ParticipantService(db).count_participants_by_event(
        event.id for event in events
    )
    return templates.TemplateResponse(
        request,
        "admin/events.html",
        {
            "nav": nav,
            "admin": admin,
            "is_super_admin": watcher.status.is_super_admin,
            "events": events,
            "counts": counts,
        },
    )


@router.get("/events/new")
async def new_event_form(
    request: Request,
    admin: User = Depends(require_admin),
    nav: List[NavLink] = Depends(get_navigation),
):
    return templates.TemplateResponse(
        request, "admin/event_form.html", {"nav": nav, "event": None, "error": None}
    )


@router.post("/events/new")
async def create_event(
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    storage: BannerStorage = Depends(get_banner_storage),
    nav: List[NavLink] = Depends(get_navigation),
):
    """Create an event with an empty registration form"""
    form_data = await request.form()

    try:
        details = _event_details_from_form(form_data)
        details["banner_url"] = await _resolve_banner_url(form_data, storage)
    except (ValueError, BannerUploadError) as e:
        return templates.TemplateResponse(
            request,
            "admin/event_form.html",
            {"nav": nav, "event": None, "error": str(e)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    result = EventService(db).create_event(details)
    if not result["success"]:
        logger.error(f"API Error: {result['error']}")
        return templates.TemplateResponse(
            request,
            "admin/event_form.html",
            {"nav": nav, "event": None, "error": "Failed to create event"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    event = result["event"]
    logger.info(f"Admin {admin.user_id} created event {event.id}")
    # The form builder takes over from the edit page
    return RedirectResponse(
        url=f"/admin/events/{event.id}/edit", status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/events/{event_id}/edit")
async def edit_event_form(
    request: Request,
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    nav: List[NavLink] = Depends(get_navigation),
):
    event = EventService(db).get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return templates.TemplateResponse(
        request, "admin/event_form.html", {"nav": nav, "event": event, "error": None}
    )


@router.post("/events/{event_id}/edit")
async def update_event(
    request: Request,
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    storage: BannerStorage = Depends(get_banner_storage),
    nav: List[NavLink] = Depends(get_navigation),
):
    """Save event metadata; the registration form is left untouched"""
    event_service = EventService(db)
    event = event_service.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    form_data = await request.form()
    try:
        details = _event_details_from_form(form_data)
        details["banner_url"] = await _resolve_banner_url(
            form_data, storage, current_url=event.banner_url or ""
        )
    except (ValueError, BannerUploadError) as e:
        return templates.TemplateResponse(
            request,
            "admin/event_form.html",
            {"nav": nav, "event": event, "error": str(e)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    result = event_service.update_event_details(event_id, details)
    if not result["success"]:
        return templates.TemplateResponse(
            request,
            "admin/event_form.html",
            {"nav": nav, "event": event, "error": result["error"]},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info(f"Admin {admin.user_id} updated event {event_id}")
    return RedirectResponse(url="/admin/events", status_code=status.HTTP_303_SEE_OTHER)


def _load_participant_view(db: Session, event_id: uuid.UUID):
    """Event, its column model, and its participants; read failures degrade to empty"""
    event = None
    fields = []
    participants = []
    try:
        event = EventService(db).get_event(event_id)
        if event:
            fields = event.get_form_fields()
    except Exception as e:
        logger.error(f"Error fetching event {event_id}: {e}")
    try:
        participants = ParticipantService(db).get_participants_for_event(event_id)
    except Exception as e:
        logger.error(f"Error fetching participants for event {event_id}: {e}")
    return event, fields, participants


@router.get("/participants/{event_id}")
async def participants_page(
    request: Request,
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
    nav: List[NavLink] = Depends(get_navigation),
):
    event, fields, participants = _load_participant_view(db, event_id)
    columns = build_columns(fields)

    return templates.TemplateResponse(
        request,
        "admin/participants.html",
        {
            "nav": nav,
            "event": event,
            "event_id": event_id,
            "headers": [*FIXED_COLUMNS, *(column.label for column in columns)],
            "rows": build_rows(participants, columns),
            "unmatched_keys": sorted(find_unmatched_keys(fields, participants)),
        },
    )


@router.get("/participants/{event_id}/export.csv")
async def export_participants(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Download the participant list as CSV"""
    event, fields, participants = _load_participant_view(db, event_id)
    if not participants:
        raise HTTPException(status_code=404, detail="No participants to export")

    export = export_csv(event, participants, build_columns(fields))
    logger.info(
        f"Admin {admin.user_id} exported {len(participants)} participants of {event_id}"
    )
    return Response(
        content=export.content.encode("utf-8"),
        media_type=f"{export.media_type}; charset=utf-8",
        headers={"Content-Disposition": content_disposition(export.filename)},
    )
