"""Shared test configuration and fixtures for Event Portal tests"""

import logging
import os
import uuid

# Settings must be in place before the app modules read them at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret-key-0123456789abcdef")
os.environ.setdefault("AUTH0_DOMAIN", "event-portal-test.us.auth0.com")
os.environ.setdefault("AUTH0_CLIENT_ID", "test-client-id")
os.environ.setdefault("AUTH0_CLIENT_SECRET", "test-client-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from event_portal import models  # noqa: E402, F401
from event_portal.auth.dependencies import get_auth_session  # noqa: E402
from event_portal.auth.session import AuthSession  # noqa: E402
from event_portal.backends.banner_storage import BannerStorage  # noqa: E402
from event_portal.main import app  # noqa: E402
from event_portal.models.admin_user import AdminUser  # noqa: E402
from event_portal.models.database import get_db  # noqa: E402
from event_portal.models.field_type import AdminRole  # noqa: E402
from event_portal.routers.admin import get_banner_storage  # noqa: E402
from event_portal.services.event_service import EventService  # noqa: E402
from event_portal.services.participant_service import ParticipantService  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def _db_engine():
    """In-memory SQLite database shared across threads for one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def _db_session(_db_engine):
    """Private DB session for fixtures only.

    Do not use this fixture directly in tests. Prefer higher-level service
    fixtures like `event_service`, `participant_service`, or `make_admin`
    to avoid coupling tests to the session internals.
    """
    session = Session(_db_engine)
    yield session
    session.close()


@pytest.fixture
def event_service(_db_session):
    """Create an EventService instance for testing"""
    return EventService(_db_session)


@pytest.fixture
def participant_service(_db_session):
    """Create a ParticipantService instance for testing"""
    return ParticipantService(_db_session)


@pytest.fixture
def make_admin(_db_session):
    """Assign an admin role to a user id"""

    def _make_admin(user_id: str, role: AdminRole = AdminRole.ADMIN) -> AdminUser:
        admin_user = AdminUser(user_id=user_id, role=role)
        _db_session.add(admin_user)
        _db_session.commit()
        return admin_user

    return _make_admin


@pytest.fixture
def make_event(event_service):
    """Create an event, optionally with registration form fields"""

    def _make_event(title="Test Event", form_fields=None, **details):
        result = event_service.create_event({"title": title, **details})
        assert result["success"], result.get("error")
        event = result["event"]
        if form_fields is not None:
            result = event_service.update_event(event.id, {"form_fields": form_fields})
            assert result["success"], result.get("error")
            event = result["event"]
        return event

    return _make_event


@pytest.fixture
def userinfo():
    """Build Auth0 userinfo for a fresh user"""

    def _userinfo(sub=None, email=None):
        sub = sub or f"auth0|{uuid.uuid4().hex[:12]}"
        return {"sub": sub, "email": email or f"{sub.split('|')[-1]}@example.com"}

    return _userinfo


@pytest.fixture
def auth_session():
    """A signed-out AuthSession backed by a plain dict"""
    return AuthSession({})


@pytest.fixture
def client(_db_session, auth_session, tmp_path):
    """Test client using the test database, the auth_session fixture, and a temp banner bucket"""

    original_overrides = app.dependency_overrides.copy()

    def get_test_db():
        return _db_session

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_auth_session] = lambda: auth_session
    app.dependency_overrides[get_banner_storage] = lambda: BannerStorage(
        str(tmp_path / "banners"), "/banners"
    )

    yield TestClient(app)

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)


@pytest.fixture
def admin_client(client, auth_session, userinfo, make_admin):
    """Test client signed in as an admin; yields (client, admin user id)"""
    info = userinfo()
    make_admin(info["sub"])
    auth_session.sign_in(info)
    return client, info["sub"]


@pytest.fixture
def user_client(client, auth_session, userinfo):
    """Test client signed in as a regular user; yields (client, user id)"""
    info = userinfo()
    auth_session.sign_in(info)
    return client, info["sub"]
