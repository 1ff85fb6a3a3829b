"""Admin authorization gate and read-only admin status"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from event_portal.auth.models import User
from event_portal.auth.session import AuthEvent, AuthSession, Subscription
from event_portal.models.field_type import AdminRole

logger = logging.getLogger(__name__)

ADMIN_LOGIN_PATH = "/admin/login"
HOME_PATH = "/"

ADMIN_ROLES = {AdminRole.ADMIN.value, AdminRole.SUPER_ADMIN.value}

# Returns the role string for a user id, or None when no assignment exists
RoleLookup = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class GateDecision:
    granted: bool
    redirect_to: Optional[str] = None
    user: Optional[User] = None

    @classmethod
    def grant(cls, user: User) -> "GateDecision":
        return cls(granted=True, user=user)

    @classmethod
    def redirect(cls, path: str) -> "GateDecision":
        return cls(granted=False, redirect_to=path)


class AdminGate:
    """
    Decides whether the session may see admin content.

    The gate fails closed: a missing assignment signs the session out and
    sends the user home, and a lookup error sends the user to the admin
    login. While mounted it re-evaluates on every auth-state change and
    keeps only the latest decision.
    """

    def __init__(self, session: AuthSession, role_lookup: RoleLookup):
        self.session = session
        self.role_lookup = role_lookup
        self.decision: Optional[GateDecision] = None
        self._subscription: Optional[Subscription] = None

    def check(self) -> GateDecision:
        user = self.session.user
        if user is None:
            self.decision = GateDecision.redirect(ADMIN_LOGIN_PATH)
            return self.decision

        try:
            role = self.role_lookup(user.user_id)
        except Exception as e:
            logger.error(f"Error fetching admin role for {user.user_id}: {e}")
            self.decision = GateDecision.redirect(ADMIN_LOGIN_PATH)
            return self.decision

        if role not in ADMIN_ROLES:
            logger.warning(f"User {user.user_id} has no admin role; signing out")
            # Signing out notifies our own listener; the home redirect set after it wins
            self.session.sign_out()
            self.decision = GateDecision.redirect(HOME_PATH)
            return self.decision

        self.decision = GateDecision.grant(user)
        return self.decision

    def mount(self) -> GateDecision:
        """Evaluate once, then follow the session's auth-state changes"""
        decision = self.check()
        if self._subscription is None:
            self._subscription = self.session.subscribe(self._on_auth_change)
        return decision

    def unmount(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_change(self, event: AuthEvent, session: AuthSession):
        logger.debug(f"Re-checking admin access after {event.value}")
        self.check()


@dataclass(frozen=True)
class AdminStatus:
    is_admin: bool = False
    is_super_admin: bool = False
    user: Optional[User] = None


def resolve_admin_status(session: AuthSession, role_lookup: RoleLookup) -> AdminStatus:
    """
    Read-only admin check used for navigation.

    Never redirects or signs out; any lookup error counts as not admin.
    """
    user = session.user
    if user is None:
        return AdminStatus()

    try:
        role = role_lookup(user.user_id)
    except Exception as e:
        logger.error(f"Error fetching admin role: {e}")
        return AdminStatus(user=user)

    return AdminStatus(
        is_admin=role in ADMIN_ROLES,
        is_super_admin=role == AdminRole.SUPER_ADMIN.value,
        user=user,
    )


class AdminStatusWatcher:
    """Keeps an AdminStatus current for a session while mounted"""

    def __init__(self, session: AuthSession, role_lookup: RoleLookup):
        self.session = session
        self.role_lookup = role_lookup
        self.status = AdminStatus()
        self._subscription: Optional[Subscription] = None

    def mount(self) -> AdminStatus:
        self.status = resolve_admin_status(self.session, self.role_lookup)
        if self._subscription is None:
            self._subscription = self.session.subscribe(self._on_auth_change)
        return self.status

    def unmount(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_change(self, event: AuthEvent, session: AuthSession):
        self.status = resolve_admin_status(session, self.role_lookup)
