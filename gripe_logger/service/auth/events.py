import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gripe_logger.model.auth.identity import Identity

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class AuthChange:
    event: AuthEvent
    identity: Optional[Identity]
    token: Optional[str] = None


Listener = Callable[[AuthChange], None]


class Subscription:
    def __init__(self, hub: "AuthEvents", listener: Listener):
        self._hub = hub
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._hub._remove(self._listener)
            self.active = False


class AuthEvents:
    """In-process fan-out of session changes to subscribed listeners."""

    def __init__(self):
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Subscription:
        with self._lock:
            self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, change: AuthChange) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(change)
            except Exception:
                logger.exception("auth listener failed for event=%s", change.event.value)

    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)


auth_events = AuthEvents()
