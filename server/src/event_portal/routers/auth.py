"""Auth0 web authentication routes for browser-based login"""

from urllib.parse import quote, urlparse

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from event_portal.auth.dependencies import get_auth_session
from event_portal.auth.oauth_client import get_auth0_client
from event_portal.auth.session import AuthSession
from event_portal.config import config
from event_portal.logging_config import get_logger

router = APIRouter(prefix="/auth", tags=["Authentication"], include_in_schema=False)

logger = get_logger(__name__)

RETURN_TO_KEY = "returnTo"


def _safe_return_path(raw_value: str | None) -> str:
    """
    Ensure the post-login redirect stays on this origin.

    Reject absolute URLs, protocol-relative URLs, and empty values.
    """
    if not raw_value or raw_value.startswith("//"):
        return "/"

    parsed = urlparse(raw_value)
    if parsed.scheme or parsed.netloc or not raw_value.startswith("/"):
        return "/"

    return raw_value


@router.get("/login")
async def login(request: Request):
    """Redirect to the Auth0 login page, remembering where to come back to"""
    oauth = get_auth0_client(request)
    request.session[RETURN_TO_KEY] = _safe_return_path(
        request.query_params.get(RETURN_TO_KEY)
    )
    redirect_uri = request.url_for("auth_callback")
    return await oauth.auth0.authorize_redirect(request, redirect_uri)


@router.get("/callback", name="auth_callback")
async def auth_callback(
    request: Request, auth_session: AuthSession = Depends(get_auth_session)
):
    """Handle the Auth0 callback and start the session"""
    oauth = get_auth0_client(request)
    token = await oauth.auth0.authorize_access_token(request)

    return_to = _safe_return_path(request.session.pop(RETURN_TO_KEY, None))
    auth_session.sign_in(token.get("userinfo") or {}, token.get("id_token"))
    return RedirectResponse(url=return_to, status_code=303)


@router.get("/logout")
async def logout(request: Request, auth_session: AuthSession = Depends(get_auth_session)):
    """Clear the session and end the Auth0 session too"""
    auth_session.sign_out()

    if not config.get("auth0_domain"):
        return RedirectResponse(url="/", status_code=303)

    logout_url = (
        f'https://{config["auth0_domain"]}/v2/logout?'
        f'client_id={config["auth0_client_id"]}&'
        f"returnTo={quote(str(request.base_url), safe='')}"
    )
    return RedirectResponse(url=logout_url, status_code=303)
