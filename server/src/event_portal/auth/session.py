"""Session object with an explicit auth-state change channel.

Components that react to sign-in, sign-out, or token refresh receive the
AuthSession they act on and subscribe to its channel, rather than
registering listeners on shared global state.
"""

import enum
import logging
from typing import Callable, List, MutableMapping, Optional

from event_portal.auth.models import User

logger = logging.getLogger(__name__)

USER_KEY = "user"
ID_TOKEN_KEY = "id_token"


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


Listener = Callable[[AuthEvent, "AuthSession"], None]


class Subscription:
    """Handle returned by subscribe; unsubscribe is safe to call twice"""

    def __init__(self, channel: "AuthStateChannel", listener: Listener):
        self._channel = channel
        self._listener = listener
        self.active = True

    def unsubscribe(self):
        if self.active:
            self._channel._remove(self._listener)
            self.active = False


class AuthStateChannel:
    """Delivers auth-state changes to subscribed listeners in order"""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def publish(self, event: AuthEvent, session: "AuthSession"):
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(event, session)

    def _remove(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __len__(self):
        return len(self._listeners)


class AuthSession:
    """
    The signed-in identity of one browser session.

    Args:
        storage: Mutable mapping backing the session, normally
            Starlette's request.session
    """

    def __init__(self, storage: MutableMapping, channel: Optional[AuthStateChannel] = None):
        self.storage = storage
        self.channel = channel if channel is not None else AuthStateChannel()

    @property
    def user(self) -> Optional[User]:
        return User.from_userinfo(self.storage.get(USER_KEY))

    @property
    def id_token(self) -> Optional[str]:
        return self.storage.get(ID_TOKEN_KEY)

    def subscribe(self, listener: Listener) -> Subscription:
        return self.channel.subscribe(listener)

    def sign_in(self, userinfo: dict, id_token: Optional[str] = None):
        self.storage[USER_KEY] = dict(userinfo)
        self.storage[ID_TOKEN_KEY] = id_token
        logger.info(f"Signed in {userinfo.get('sub')}")
        self.channel.publish(AuthEvent.SIGNED_IN, self)

    def refresh(self, id_token: str):
        self.storage[ID_TOKEN_KEY] = id_token
        self.channel.publish(AuthEvent.TOKEN_REFRESHED, self)

    def sign_out(self):
        user = self.user
        self.storage.clear()
        if user is not None:
            logger.info(f"Signed out {user.user_id}")
        self.channel.publish(AuthEvent.SIGNED_OUT, self)
