from typing import Optional

from authgate.core.interfaces import SEVERITY_ERROR, SEVERITY_SUCCESS, NotificationCapability
from authgate.core.validation import CONSENT_MISSING, FIELDS_MISSING, PHONE_INVALID
from authgate.observability.logging import log

LOGIN_REJECTED = "login_rejected"
LOGIN_EXCEPTION = "login_exception"
LOGIN_SUCCESS = "login_success"

LOGIN_FAILED_FALLBACK = "Login failed. Please try again."

MESSAGES = {
    CONSENT_MISSING: "Please agree to the terms and privacy policy",
    FIELDS_MISSING: "Please enter both phone number and password",
    PHONE_INVALID: "Please enter a valid 10-digit phone number",
    LOGIN_REJECTED: "Invalid phone number or password",
    LOGIN_SUCCESS: "Login successful!",
}


def message_for(kind: str, message: Optional[str] = None) -> str:
    if kind == LOGIN_EXCEPTION:
        return message or LOGIN_FAILED_FALLBACK
    try:
        return MESSAGES[kind]
    except KeyError:
        raise ValueError(f"Unknown notification kind: {kind}")


def severity_for(kind: str) -> str:
    return SEVERITY_SUCCESS if kind == LOGIN_SUCCESS else SEVERITY_ERROR


class NotificationBridge:
    """Turns internal outcomes into exactly one toast each."""

    def __init__(self, notifier: NotificationCapability):
        self.notifier = notifier

    def signal(self, kind: str, message: Optional[str] = None) -> str:
        text = message_for(kind, message)
        severity = severity_for(kind)
        log(event="login_notify", kind=kind, severity=severity)
        self.notifier.notify(text, severity)
        return text
