"""Request-scoped stand-ins for the browser-side router and toast display."""

from typing import List, Optional

from authgate.api.schemas import NotificationOut, RedirectOut
from authgate.core.interfaces import NavigationIntent


class CollectingNotifier:
    def __init__(self):
        self.notifications: List[NotificationOut] = []

    def notify(self, message: str, severity: str) -> None:
        self.notifications.append(NotificationOut(message=message, severity=severity))


class RequestNavigator:
    """Holds the intent carried by the request and records the navigate() call."""

    def __init__(self, intent_path: Optional[str] = None):
        self._intent = NavigationIntent(path=intent_path) if intent_path else None
        self.redirect: Optional[RedirectOut] = None

    @property
    def current_intent(self) -> Optional[NavigationIntent]:
        return self._intent

    def navigate(self, path: str, *, replace: bool = False) -> None:
        self.redirect = RedirectOut(path=path, replace=replace)
