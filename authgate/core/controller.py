"""
Submission lifecycle for one login form.

    IDLE --submit--> IN_FLIGHT --success--> SUCCEEDED
                     IN_FLIGHT --failure--> FAILED(reason)
    SUCCEEDED / FAILED --submit--> IN_FLIGHT   (re-entrant, no cool-down)

INVARIANT: at most one auth call is outstanding per controller. While one is
in flight, further submits return immediately without validating, notifying
or calling the auth capability.

INVARIANT: the in-flight flag is cleared in a `finally` block, whatever the
auth call did (resolved, rejected, raised or was cancelled).

The controller only reports outcomes. The session change that follows a
successful login belongs to the auth capability and is picked up by the
SessionObserver.
"""

import asyncio
import time
from typing import Any, Callable, Optional

from authgate.core import state_machine as sm
from authgate.core.interfaces import AuthCapability
from authgate.core.notifications import (
    LOGIN_EXCEPTION,
    LOGIN_REJECTED,
    LOGIN_SUCCESS,
    NotificationBridge,
)
from authgate.core.validation import validate_submission
from authgate.observability.logging import log

StateListener = Callable[[sm.SubmissionState], None]


def _is_success(outcome: Any) -> bool:
    """Accept LoginResult-like objects as well as plain {"success": ...} mappings."""
    if isinstance(outcome, dict):
        return bool(outcome.get("success"))
    return bool(getattr(outcome, "success", False))


def _exception_message(exc: BaseException) -> Optional[str]:
    msg = getattr(exc, "message", None)
    if isinstance(msg, str) and msg.strip():
        return msg
    text = str(exc)
    return text if text.strip() else None


class SubmissionController:
    def __init__(
        self,
        auth: AuthCapability,
        bridge: NotificationBridge,
        on_change: Optional[StateListener] = None,
    ):
        self.auth = auth
        self.bridge = bridge
        self.on_change = on_change
        self.state = sm.SubmissionState()
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def can_submit(self) -> bool:
        # Drives the disabled attribute of the submit control
        return not self._in_flight

    def _transition(self, status: str, reason: Optional[str] = None) -> None:
        previous = self.state.status
        self.state = sm.SubmissionState(status=status, reason=reason)
        log(event="login_state", fromState=previous, toState=status, reason=reason)
        if self.on_change is not None:
            self.on_change(self.state)

    async def submit(self, phone: Optional[str], password: Optional[str], consent: bool) -> sm.SubmissionState:
        if self._in_flight:
            log(event="login_submit_ignored", state=self.state.status)
            return self.state

        result = validate_submission(phone, password, consent)
        if not result.ok:
            log(event="login_validation_failed", kind=result.error)
            self.bridge.signal(result.error)
            self._transition(sm.IDLE)
            return self.state

        self._in_flight = True
        self._transition(sm.IN_FLIGHT)
        started = time.monotonic()
        try:
            outcome = await self.auth.login(result.credentials)
        except Exception as e:
            log(event="login_submit_exception", errorType=type(e).__name__, error=str(e)[:300])
            text = self.bridge.signal(LOGIN_EXCEPTION, _exception_message(e))
            self._transition(sm.FAILED, text)
        else:
            if _is_success(outcome):
                self.bridge.signal(LOGIN_SUCCESS)
                self._transition(sm.SUCCEEDED)
            else:
                text = self.bridge.signal(LOGIN_REJECTED)
                self._transition(sm.FAILED, text)
        finally:
            self._in_flight = False
            if self.state.status == sm.IN_FLIGHT:
                # Cancelled while awaiting the auth capability
                self._transition(sm.IDLE)
            log(
                event="login_submit_done",
                status=self.state.status,
                elapsedMs=int((time.monotonic() - started) * 1000),
            )

        return self.state

    def dispatch(self, phone: Optional[str], password: Optional[str], consent: bool) -> "asyncio.Task":
        """Schedule submit() on the running loop and return immediately (UI event handler form)."""
        loop = asyncio.get_running_loop()
        return loop.create_task(self.submit(phone, password, consent))
