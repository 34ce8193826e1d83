import pytest
from unittest.mock import MagicMock
from authgate.core.notifications import (
    LOGIN_EXCEPTION,
    LOGIN_REJECTED,
    LOGIN_SUCCESS,
    NotificationBridge,
)
from authgate.core.validation import CONSENT_MISSING, FIELDS_MISSING, PHONE_INVALID

@pytest.mark.parametrize("kind,text,severity", [
    (CONSENT_MISSING, "Please agree to the terms and privacy policy", "error"),
    (FIELDS_MISSING, "Please enter both phone number and password", "error"),
    (PHONE_INVALID, "Please enter a valid 10-digit phone number", "error"),
    (LOGIN_REJECTED, "Invalid phone number or password", "error"),
    (LOGIN_SUCCESS, "Login successful!", "success"),
])
def test_each_kind_maps_to_one_notification(kind, text, severity):
    notifier = MagicMock()
    out = NotificationBridge(notifier).signal(kind)
    assert out == text
    notifier.notify.assert_called_once_with(text, severity)

def test_exception_kind_uses_given_message_or_fallback():
    notifier = MagicMock()
    bridge = NotificationBridge(notifier)
    bridge.signal(LOGIN_EXCEPTION, "Network error")
    bridge.signal(LOGIN_EXCEPTION)
    assert [c.args for c in notifier.notify.call_args_list] == [
        ("Network error", "error"),
        ("Login failed. Please try again.", "error"),
    ]

def test_unknown_kind_raises_without_notifying():
    notifier = MagicMock()
    with pytest.raises(ValueError):
        NotificationBridge(notifier).signal("something_else")
    notifier.notify.assert_not_called()
