#!/usr/bin/env python3
"""Event Portal - public event registration and admin console"""

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from event_portal.auth.oauth_client import register_auth0
from event_portal.config import config
from event_portal.logging_config import get_logger, setup_logging
from event_portal.routers import admin, auth, events_api, participants_api, public
from event_portal.routers.health import health

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


app = FastAPI(
    title="Event Portal",
    description="Event registration portal - browse events, register, and manage registrations",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url=None,
)

# Trust proxy headers so request.url.scheme reflects the original HTTPS protocol
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

session_secret_key = config["session_secret_key"]
if not session_secret_key or len(session_secret_key) < 32:
    raise RuntimeError(
        "SESSION_SECRET_KEY must be set to a secure random string (>=32 characters)."
    )

app.add_middleware(
    SessionMiddleware,
    secret_key=session_secret_key,
    max_age=60 * 60 * 8,  # 8 hours
    https_only=config.get("environment") == "production",
    same_site="lax",  # Allow cookies to be sent on redirects from Auth0
)

register_auth0(app)

# Include routers
app.include_router(health)
app.include_router(auth.router)
app.include_router(events_api.router)
app.include_router(participants_api.router)
app.include_router(admin.router)
app.include_router(public.router)

# Uploaded event banners
app.mount(
    config["banner_public_prefix"],
    StaticFiles(directory=config["banner_storage_dir"], check_dir=False),
    name="banners",
)


if __name__ == "__main__":
    port = config.get("port")
    logger.info(f"Starting Event Portal on 0.0.0.0:{port}")
    logger.info("Health check available at /health")

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise
