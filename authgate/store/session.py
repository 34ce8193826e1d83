import asyncio
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from authgate.core.interfaces import SessionListener
from authgate.observability.logging import log


@dataclass
class SessionState:
    authenticated: bool = False
    # Opaque to the login gate (user record, claims, ...)
    identity: Optional[Any] = None


class SessionStore:
    """
    In-process session capability. Written by the auth capability (login or
    restore), read by everyone else through is_authenticated / subscribe().
    Listeners receive the authenticated flag after every change. Inside a
    running event loop delivery is deferred to the next loop iteration, so the
    writer (the auth call) resolves before anyone reacts to the new session.
    """

    def __init__(self, state: Optional[SessionState] = None):
        self._state = state or SessionState()
        self._listeners: List[SessionListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self._state.authenticated

    @property
    def identity(self) -> Optional[Any]:
        return self._state.identity

    def snapshot(self) -> SessionState:
        return SessionState(authenticated=self._state.authenticated, identity=self._state.identity)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _deliver(self, authenticated: bool) -> None:
        for listener in list(self._listeners):
            listener(authenticated)

    def _publish(self) -> None:
        authenticated = self._state.authenticated
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deliver(authenticated)
            return
        loop.call_soon(self._deliver, authenticated)

    def set_authenticated(self, identity: Any) -> None:
        self._state = SessionState(authenticated=True, identity=identity)
        log(event="session_authenticated", identity=identity)
        self._publish()

    def restore(self, identity: Any) -> None:
        """Rehydrate a previously established session (e.g. from a cookie)."""
        self._state = SessionState(authenticated=True, identity=identity)
        log(event="session_restored", identity=identity)
        self._publish()

    def clear(self) -> None:
        if not self._state.authenticated and self._state.identity is None:
            return
        self._state = SessionState()
        log(event="session_cleared")
        self._publish()
