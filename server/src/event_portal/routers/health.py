import os
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from sqlmodel import Session, text

from event_portal.models.database import engine

health = APIRouter(tags=["Health"])

SERVICE_NAME = "event-portal"
REQUIRED_SETTINGS = ("DATABASE_URL", "SESSION_SECRET_KEY", "AUTH0_DOMAIN")


def _base_status() -> dict:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": os.getenv("ENVIRONMENT", "development"),
    }


def _check_database() -> str:
    try:
        with Session(engine) as session:
            result = session.exec(text("SELECT 1")).first()
    except Exception as e:
        return f"unhealthy: {str(e)}"
    return "healthy" if result else "unhealthy"


def _check_settings() -> str:
    missing = [name for name in REQUIRED_SETTINGS if not os.getenv(name)]
    return f"missing: {', '.join(missing)}" if missing else "healthy"


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return _base_status()


@health.get("/health/detailed")
async def detailed_health_check(request: Request):
    """Database connectivity, required settings, and the Auth0 client registration"""
    checks = {
        "database": _check_database(),
        "environment": _check_settings(),
        "auth0": (
            "healthy"
            if getattr(request.app.state, "oauth", None) is not None
            else "unhealthy: client not registered"
        ),
    }
    health_status = {**_base_status(), "checks": checks}
    if any(value != "healthy" for value in checks.values()):
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
