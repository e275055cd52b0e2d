import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.auth.role import Role
from gripe_logger.service.auth import auth as auth_service
from gripe_logger.service.auth.events import AuthChange, AuthEvent, AuthEvents, Subscription, auth_events

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthState:
    loading: bool = True
    user_id: Optional[str] = None
    role: Optional[Role] = None


class SessionContext:
    """Current session for one client, kept in sync with auth events.

    ``start()`` subscribes before restoring the existing session so that a
    sign-out racing the restore is not missed; ``close()`` unsubscribes.
    While the role lookup is outstanding the state reports ``loading``.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        events: AuthEvents = auth_events,
        role_lookup: Optional[Callable[[str], Optional[Role]]] = None,
    ):
        self.token = token
        self._events = events
        self._role_lookup = role_lookup or auth_service.fetch_role
        self._subscription: Optional[Subscription] = None
        self.state = AuthState(loading=True)

    def __enter__(self) -> "SessionContext":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def start(self) -> "SessionContext":
        if self._subscription is None:
            self._subscription = self._events.subscribe(self._on_change)
        identity = auth_service.resolve_token(self.token)
        if identity is None:
            self.token = None
            self.state = AuthState(loading=False)
        else:
            self._load(identity)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def sign_in(self, email: str, password: str):
        session = auth_service.sign_in(email, password)
        self.token = session.access_token
        self._load(Identity(user_id=session.profile.id, email=session.profile.email))
        return session

    def sign_out(self) -> None:
        token, self.token = self.token, None
        # local state is cleared whatever the store says
        self.state = AuthState(loading=False)
        if token:
            auth_service.sign_out(token)

    def _on_change(self, change: AuthChange) -> None:
        if self.token is None or change.token != self.token:
            return
        if change.event == AuthEvent.SIGNED_OUT:
            self.token = None
            self.state = AuthState(loading=False)
        elif change.identity is not None:
            self._load(change.identity)

    def _load(self, identity: Identity) -> None:
        self.state = AuthState(loading=True, user_id=identity.user_id)
        role = None
        try:
            role = self._role_lookup(identity.user_id)
        except Exception:
            logger.exception("failed to fetch role for user=%s", identity.user_id)
        self.state = AuthState(loading=False, user_id=identity.user_id, role=role)
