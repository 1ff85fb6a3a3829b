"""JSON endpoints for event registrations"""

import uuid
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlmodel import Session

from event_portal.auth.admin_gate import resolve_admin_status
from event_portal.auth.dependencies import get_auth_session, require_user
from event_portal.auth.models import User
from event_portal.auth.session import AuthSession
from event_portal.exceptions import (
    DuplicateRegistrationError,
    EventNotFoundError,
    RegistrationClosedError,
)
from event_portal.logging_config import get_logger
from event_portal.models.database import get_db
from event_portal.services.admin_user_service import AdminUserService
from event_portal.services.participant_service import ParticipantService

router = APIRouter(prefix="/api/participants", tags=["Participants"])
logger = get_logger(__name__)


class ParticipantCreate(BaseModel):
    event_id: uuid.UUID
    user_id: str = Field(..., min_length=1)
    # Values are strings or booleans; keys are field ids (or labels in older clients)
    responses: Dict[str, Any] = Field(default_factory=dict)


@router.get("/{event_id}")
async def get_participants(
    event_id: uuid.UUID,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
    auth_session: AuthSession = Depends(get_auth_session),
):
    """
    List an event's participants (admins), or look up one user's registration.

    With ?userId= a signed-in user may look up their own registration;
    admins may look up anyone.
    """
    admin_status = resolve_admin_status(auth_session, AdminUserService(db).get_role)
    if admin_status.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )

    participant_service = ParticipantService(db)

    if user_id is not None:
        if user_id != admin_status.user.user_id and not admin_status.is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cannot read another user's registration",
            )
        participant = participant_service.get_participant_for_user(event_id, user_id)
        return {
            "success": True,
            "participant": participant.to_payload() if participant else None,
        }

    if not admin_status.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )

    participants = participant_service.get_participants_for_event(event_id)
    return {
        "success": True,
        "participants": [participant.to_payload() for participant in participants],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_participant(
    request: ParticipantCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """Register the signed-in user for an event"""
    if request.user_id != user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot register on behalf of another user",
        )

    try:
        participant = ParticipantService(db).register(
            request.event_id, request.user_id, request.responses
        )
    except EventNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": str(e)},
        )
    except RegistrationClosedError as e:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"success": False, "error": str(e)},
        )
    except DuplicateRegistrationError:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "success": False,
                "error": "You are already registered for this event.",
            },
        )

    return {"success": True, "participant": participant.to_payload()}
