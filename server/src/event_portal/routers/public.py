"""Public pages: browsing events and registering for them"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from event_portal.auth.dependencies import get_auth_session, get_navigation
from event_portal.auth.models import User
from event_portal.auth.session import AuthSession
from event_portal.exceptions import (
    DuplicateRegistrationError,
    EventNotFoundError,
    FormValidationError,
    RegistrationClosedError,
)
from event_portal.logging_config import get_logger
from event_portal.models.database import get_db
from event_portal.models.event import Event
from event_portal.routers.templating import templates
from event_portal.services.dynamic_form import collect_responses, render_fields
from event_portal.services.event_service import EventService
from event_portal.services.navigation import NavLink
from event_portal.services.participant_service import ParticipantService

router = APIRouter(include_in_schema=False)
logger = get_logger(__name__)

HOME_EVENT_LIMIT = 3


@router.get("/")
async def home(
    request: Request,
    db: Session = Depends(get_db),
    nav: List[NavLink] = Depends(get_navigation),
):
    events = EventService(db).list_events(active_only=True)
    return templates.TemplateResponse(
        request, "home.html", {"nav": nav, "events": events[:HOME_EVENT_LIMIT]}
    )


@router.get("/events")
async def list_events(
    request: Request,
    db: Session = Depends(get_db),
    nav: List[NavLink] = Depends(get_navigation),
):
    try:
        events = EventService(db).list_events(active_only=True)
    except Exception as e:
        logger.error(f"Error fetching events: {e}")
        events = []
    return templates.TemplateResponse(
        request, "events/list.html", {"nav": nav, "events": events}
    )


def _event_page(
    request: Request,
    event: Optional[Event],
    user: Optional[User],
    nav: List[NavLink],
    *,
    is_registered: bool = False,
    submitted: bool = False,
    error: Optional[str] = None,
    values: Optional[dict] = None,
    status_code: int = status.HTTP_200_OK,
):
    if event is None:
        return templates.TemplateResponse(
            request,
            "events/not_found.html",
            {"nav": nav},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return templates.TemplateResponse(
        request,
        "events/detail.html",
        {
            "nav": nav,
            "event": event,
            "user": user,
            "is_registered": is_registered,
            "submitted": submitted,
            "registration_available": event.registration_available(),
            "fields": render_fields(event.get_form_fields()),
            "values": values or {},
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/events/{event_id}")
async def event_detail(
    request: Request,
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    auth_session: AuthSession = Depends(get_auth_session),
    nav: List[NavLink] = Depends(get_navigation),
):
    """Event details plus whichever registration state applies to the visitor"""
    try:
        event = EventService(db).get_event(event_id)
    except Exception as e:
        logger.error(f"Error fetching event {event_id}: {e}")
        event = None

    user = auth_session.user
    is_registered = False
    if event is not None and user is not None:
        try:
            is_registered = ParticipantService(db).is_registered(event.id, user.user_id)
        except Exception as e:
            logger.error(f"Error checking registration status: {e}")

    return _event_page(request, event, user, nav, is_registered=is_registered)


@router.post("/events/{event_id}/register")
async def submit_registration(
    request: Request,
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    auth_session: AuthSession = Depends(get_auth_session),
    nav: List[NavLink] = Depends(get_navigation),
):
    """Handle a registration form submission for the signed-in user"""
    user = auth_session.user
    if user is None:
        return RedirectResponse(
            url=f"/auth/login?returnTo=/events/{event_id}",
            status_code=status.HTTP_303_SEE_OTHER,
        )

    event = EventService(db).get_event(event_id)
    if event is None:
        return _event_page(request, None, user, nav)

    form_data = await request.form()

    try:
        responses = collect_responses(event.get_form_fields(), form_data)
        ParticipantService(db).register(event.id, user.user_id, responses)
    except FormValidationError as e:
        return _event_page(
            request,
            event,
            user,
            nav,
            error=e.message,
            values=dict(form_data),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except DuplicateRegistrationError:
        return _event_page(
            request,
            event,
            user,
            nav,
            is_registered=True,
            error="Registration failed: You are already registered for this event.",
            status_code=status.HTTP_409_CONFLICT,
        )
    except RegistrationClosedError:
        return _event_page(
            request,
            event,
            user,
            nav,
            error="Registration for this event is currently closed.",
            status_code=status.HTTP_403_FORBIDDEN,
        )
    except EventNotFoundError:
        return _event_page(request, None, user, nav)
    except Exception as e:
        logger.error(f"Error submitting registration: {type(e).__name__}: {e}")
        return _event_page(
            request,
            event,
            user,
            nav,
            error="Failed to submit registration. Please try again.",
            values=dict(form_data),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info(f"User {user.user_id} registered for event {event.id}")
    return _event_page(request, event, user, nav, is_registered=True, submitted=True)
