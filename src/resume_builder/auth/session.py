"""Session context: the current session plus change notification."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable

from resume_builder.auth.identity import AuthError, IdentityProvider
from resume_builder.models.auth import Session, User

logger = logging.getLogger(__name__)


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_RESTORED = "TOKEN_RESTORED"


SessionListener = Callable[[AuthEvent, "Session | None"], None]


class SessionContext:
    """Explicitly scoped auth state, passed to whatever needs the current user."""

    def __init__(self, provider: IdentityProvider):
        self.provider = provider
        self._session: Session | None = None
        self._listeners: list[SessionListener] = []

    def subscribe(self, callback: SessionListener) -> Callable[[], None]:
        """Register for session changes. Returns an unsubscribe callable."""
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def _emit(self, event: AuthEvent) -> None:
        for callback in list(self._listeners):
            try:
                callback(event, self._session)
            except Exception:
                logger.exception("Session listener failed")

    def get_current_session(self) -> Session | None:
        if self._session is not None and self._session.expired:
            logger.info("Session expired for user %s", self._session.user_id)
            self._session = None
            self._emit(AuthEvent.SIGNED_OUT)
        return self._session

    @property
    def user(self) -> User | None:
        session = self.get_current_session()
        return session.user if session else None

    def sign_up(self, email: str, password: str) -> User:
        return self.provider.sign_up(email, password)

    def sign_in(self, email: str, password: str) -> Session:
        self._session = self.provider.sign_in(email, password)
        self._emit(AuthEvent.SIGNED_IN)
        return self._session

    def sign_out(self) -> None:
        if self._session is None:
            return
        self._session = None
        self._emit(AuthEvent.SIGNED_OUT)

    def restore(self, token: str) -> Session | None:
        """Resume a session from a previously issued access token."""
        session = self.provider.verify(token)
        if session is None:
            return None
        self._session = session
        self._emit(AuthEvent.TOKEN_RESTORED)
        return session


def require_session(context: SessionContext) -> Session:
    """Guard for protected pages."""
    session = context.get_current_session()
    if session is None:
        raise AuthError("Not authenticated")
    return session
