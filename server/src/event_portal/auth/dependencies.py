"""Authentication dependencies for FastAPI"""

from typing import List, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from event_portal.auth.admin_gate import (
    AdminGate,
    AdminStatusWatcher,
    resolve_admin_status,
)
from event_portal.auth.models import User
from event_portal.auth.session import AuthSession
from event_portal.logging_config import get_logger
from event_portal.models.database import get_db
from event_portal.services.admin_user_service import AdminUserService
from event_portal.services.navigation import NavLink, build_navigation

logger = get_logger(__name__)

SAFE_METHODS = ("GET", "HEAD")


def get_auth_session(request: Request) -> AuthSession:
    """
    The AuthSession for this request, backed by the signed cookie session.

    One instance per request so every component sees the same channel.
    """
    auth_session = getattr(request.state, "auth_session", None)
    if auth_session is None:
        auth_session = AuthSession(request.session)
        request.state.auth_session = auth_session
    return auth_session


def get_current_user_optional(
    auth_session: AuthSession = Depends(get_auth_session),
) -> Optional[User]:
    return auth_session.user


def require_user(
    auth_session: AuthSession = Depends(get_auth_session),
) -> User:
    """
    Require a signed-in user for API routes.

    Raises:
        HTTPException: 401 if there is no signed-in user
    """
    user = auth_session.user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(
    request: Request,
    auth_session: AuthSession = Depends(get_auth_session),
    db: Session = Depends(get_db),
):
    """
    Gate for admin pages.

    Yields the admin User when access is granted. Otherwise redirects to
    wherever the gate decided (admin login or home): 307 for GET and HEAD,
    303 for form posts so the browser follows up with a GET. The gate
    stays subscribed to the session for the lifetime of the request.
    """
    gate = AdminGate(auth_session, AdminUserService(db).get_role)
    decision = gate.mount()
    try:
        if not decision.granted:
            raise HTTPException(
                status_code=(
                    status.HTTP_307_TEMPORARY_REDIRECT
                    if request.method in SAFE_METHODS
                    else status.HTTP_303_SEE_OTHER
                ),
                headers={"Location": decision.redirect_to},
            )
        yield decision.user
    finally:
        gate.unmount()


def require_admin_api(
    auth_session: AuthSession = Depends(get_auth_session),
    db: Session = Depends(get_db),
) -> User:
    """
    Admin check for JSON routes: 401 without a session, 403 without a role.

    Uses the read-only status so API callers are never signed out.
    """
    admin_status = resolve_admin_status(auth_session, AdminUserService(db).get_role)
    if admin_status.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    if not admin_status.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return admin_status.user


def get_admin_status(
    auth_session: AuthSession = Depends(get_auth_session),
    db: Session = Depends(get_db),
):
    """Admin status kept current for the request, for navigation and page logic"""
    watcher = AdminStatusWatcher(auth_session, AdminUserService(db).get_role)
    watcher.mount()
    try:
        yield watcher
    finally:
        watcher.unmount()


def get_navigation(
    request: Request,
    watcher: AdminStatusWatcher = Depends(get_admin_status),
) -> List[NavLink]:
    return build_navigation(watcher.status, request.url.path)
