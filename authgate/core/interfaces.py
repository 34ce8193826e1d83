"""
Collaborator contracts for the login gate.

The core never reaches for process-wide state: the auth backend, the session,
the router and the toast display are all handed in as objects satisfying the
protocols below.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

SEVERITY_ERROR = "error"
SEVERITY_SUCCESS = "success"


@dataclass(frozen=True)
class Credentials:
    phone_digits: str
    password: str

    def to_payload(self) -> dict:
        # Wire shape expected by the auth backend
        return {"phoneNumber": self.phone_digits, "password": self.password}


@dataclass(frozen=True)
class LoginResult:
    success: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class NavigationIntent:
    path: Optional[str] = None


class AuthServiceError(Exception):
    """Transport or server failure while talking to the auth backend."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "")
        self.message = message


class AuthCapability(Protocol):
    async def login(self, credentials: Credentials) -> LoginResult:
        ...


SessionListener = Callable[[bool], None]


class SessionCapability(Protocol):
    @property
    def is_authenticated(self) -> bool:
        ...

    @property
    def identity(self) -> Any:
        ...

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        ...


class NavigationCapability(Protocol):
    @property
    def current_intent(self) -> Optional[NavigationIntent]:
        ...

    def navigate(self, path: str, *, replace: bool = False) -> None:
        ...


class NotificationCapability(Protocol):
    def notify(self, message: str, severity: str) -> None:
        ...
