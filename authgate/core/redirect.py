from typing import Any, Optional

from authgate.core.interfaces import NavigationIntent
from authgate.settings import settings


def resolve(intent: Optional[NavigationIntent], default_path: Optional[str] = None) -> str:
    """
    Post-login destination: the preserved intent's path, else the home path.
    Called fresh for every redirect; the intent is legitimately None on a
    direct visit to the login page.
    """
    if intent is not None and intent.path:
        return intent.path
    return default_path or settings.DEFAULT_REDIRECT_PATH or "/"


def intent_from_state(state: Any) -> Optional[NavigationIntent]:
    """
    Read a router location state of the shape {"from": {"pathname": "/x"}}.
    A bare string or {"from": "/x"} is accepted as well.
    """
    if state is None:
        return None
    if isinstance(state, NavigationIntent):
        return state
    if isinstance(state, str):
        return NavigationIntent(path=state) if state else None
    if not isinstance(state, dict):
        return None

    origin = state.get("from")
    if isinstance(origin, dict):
        path = origin.get("pathname")
    elif isinstance(origin, str):
        path = origin
    else:
        path = state.get("pathname")

    if not isinstance(path, str) or not path:
        return None
    return NavigationIntent(path=path)


class RedirectResolver:
    def __init__(self, default_path: Optional[str] = None):
        self.default_path = default_path

    def resolve(self, intent: Optional[NavigationIntent]) -> str:
        return resolve(intent, self.default_path)
