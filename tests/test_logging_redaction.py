import json
from unittest.mock import patch
from authgate.observability.logging import log
from authgate.settings import settings

def _last_line(capsys):
    return json.loads(capsys.readouterr().out.strip().splitlines()[-1])

def test_credentials_are_redacted(capsys):
    with patch.object(settings, "ENABLE_PII_REDACTION", True):
        log(event="auth_login_attempt", phoneNumber="5551234567", password="secret", url="https://x")
    line = _last_line(capsys)
    assert line["event"] == "auth_login_attempt"
    assert line["phoneNumber"] == "[REDACTED:10chars]"
    assert line["password"] == "[REDACTED:6chars]"
    assert line["url"] == "https://x"

def test_nested_and_identity_redaction(capsys):
    with patch.object(settings, "ENABLE_PII_REDACTION", True):
        log(event="x", identity={"id": "u1"}, payload={"password": "pw", "formId": "f1"})
    line = _last_line(capsys)
    assert line["identity"] == {"id": "[REDACTED:2chars]"}
    assert line["payload"] == {"password": "[REDACTED:2chars]", "formId": "f1"}

def test_redaction_disabled(capsys):
    with patch.object(settings, "ENABLE_PII_REDACTION", False):
        log(event="x", password="secret")
    assert _last_line(capsys)["password"] == "secret"
