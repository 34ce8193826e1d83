import asyncio
from typing import Any, Dict, Optional

from authgate.core import state_machine as sm
from authgate.core.controller import SubmissionController
from authgate.core.interfaces import (
    AuthCapability,
    NavigationCapability,
    NotificationCapability,
    SessionCapability,
)
from authgate.core.notifications import NotificationBridge
from authgate.core.observer import SessionObserver
from authgate.core.redirect import RedirectResolver
from authgate.core.validation import clamp_phone_input
from authgate.settings import settings

SUBMIT_LABEL = "Login"
SUBMIT_LABEL_BUSY = "Logging in..."


class LoginForm:
    """
    The login page minus its markup: field values, the submission controller
    and the session observer wired to the injected collaborators.
    """

    def __init__(
        self,
        auth: AuthCapability,
        session: SessionCapability,
        navigator: NavigationCapability,
        notifier: NotificationCapability,
        resolver: Optional[RedirectResolver] = None,
        phone_max_length: Optional[int] = None,
    ):
        self.phone_number = ""
        self.password = ""
        self.agree = False
        self.phone_max_length = (
            phone_max_length if phone_max_length is not None else settings.PHONE_INPUT_MAX_LENGTH
        )

        self.controller = SubmissionController(auth, NotificationBridge(notifier))
        self.observer = SessionObserver(
            session,
            navigator,
            resolver=resolver,
            on_redirect=self._on_redirect,
        )

    # --- input events -------------------------------------------------------

    def set_phone_number(self, raw: Optional[str], clamp: bool = True) -> str:
        # Keystrokes are cut at the field's max length; a whole submitted value is not
        self.phone_number = clamp_phone_input(raw, self.phone_max_length if clamp else 0)
        return self.phone_number

    def set_password(self, value: Optional[str]) -> None:
        self.password = value or ""

    def set_agree(self, checked: Any) -> None:
        self.agree = bool(checked)

    def clear(self) -> None:
        self.phone_number = ""
        self.password = ""
        self.agree = False

    # --- lifecycle ----------------------------------------------------------

    def mount(self) -> None:
        self.observer.start()

    def unmount(self) -> None:
        self.observer.stop()
        self.clear()

    def _on_redirect(self, path: str) -> None:
        self.clear()

    # --- submission ---------------------------------------------------------

    @property
    def state(self) -> sm.SubmissionState:
        return self.controller.state

    async def submit(self) -> sm.SubmissionState:
        state = await self.controller.submit(self.phone_number, self.password, self.agree)
        # Session changes made by the auth call are delivered on the next loop pass
        await asyncio.sleep(0)
        return state

    def dispatch(self) -> "asyncio.Task":
        return self.controller.dispatch(self.phone_number, self.password, self.agree)

    def view(self) -> Dict[str, Any]:
        """Render-ready snapshot. The password never leaves the form."""
        busy = self.controller.in_flight
        return {
            "phoneNumber": self.phone_number,
            "agree": self.agree,
            "isLoading": busy,
            "submitDisabled": not self.controller.can_submit,
            "submitLabel": SUBMIT_LABEL_BUSY if busy else SUBMIT_LABEL,
            "status": self.state.status,
            "reason": self.state.reason,
        }
