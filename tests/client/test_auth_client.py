import asyncio
import json
import httpx
import pytest
from unittest.mock import MagicMock, patch
from authgate.client.auth_client import HttpAuthClient
from authgate.core import state_machine as sm
from authgate.core.controller import SubmissionController
from authgate.core.interfaces import AuthServiceError, Credentials
from authgate.core.notifications import NotificationBridge
from authgate.settings import settings
from authgate.store.session import SessionStore

BASE_URL = "https://auth.example.com"
CREDS = Credentials(phone_digits="5551234567", password="secret")


def _login(handler, session=None, base_url=BASE_URL, credentials=CREDS):
    session = session if session is not None else SessionStore()

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = HttpAuthClient(session, client=http, base_url=base_url, login_path="/api/auth/login")
            return await client.login(credentials)

    return asyncio.run(run())


def test_success_posts_credentials_and_sets_session():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["json"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "user": {"id": "u1"}})

    session = SessionStore()
    result = _login(handler, session)

    assert result.success is True
    assert seen["url"] == "https://auth.example.com/api/auth/login"
    assert seen["json"] == {"phoneNumber": "5551234567", "password": "secret"}
    assert session.is_authenticated is True
    assert session.identity == {"id": "u1"}

def test_success_without_user_falls_back_to_phone_identity():
    session = SessionStore()
    _login(lambda request: httpx.Response(200, json={"success": True}), session)
    assert session.identity == {"phoneNumber": "5551234567"}

def test_negative_answer_leaves_session_alone():
    session = SessionStore()
    result = _login(lambda request: httpx.Response(200, json={"success": False, "message": "nope"}), session)
    assert result.success is False
    assert result.message == "nope"
    assert session.is_authenticated is False

@pytest.mark.parametrize("status", [400, 401, 403, 404])
def test_rejection_statuses_are_a_negative_result(status):
    result = _login(lambda request: httpx.Response(status, json={"message": "Invalid credentials"}))
    assert result.success is False
    assert result.message == "Invalid credentials"

def test_server_error_raises_with_body_message():
    with pytest.raises(AuthServiceError) as exc:
        _login(lambda request: httpx.Response(500, json={"message": "Server is down"}))
    assert exc.value.message == "Server is down"

def test_server_error_without_json_has_no_message():
    with pytest.raises(AuthServiceError) as exc:
        _login(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))
    assert exc.value.message is None

def test_transport_error_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthServiceError) as exc:
        _login(handler)
    assert exc.value.message == "Network error"

def test_missing_service_url():
    handler = MagicMock()
    with pytest.raises(AuthServiceError) as exc:
        _login(handler, base_url="")
    assert exc.value.message is None
    handler.assert_not_called()

def test_client_api_key_header():
    seen = {}

    def handler(request):
        seen["key"] = request.headers.get("x-client-api-key")
        return httpx.Response(200, json={"success": False})

    with patch.object(settings, "AUTH_CLIENT_API_KEY", "k-123"):
        _login(handler)
    assert seen["key"] == "k-123"

def test_controller_shows_server_message_end_to_end():
    notifier = MagicMock()
    session = SessionStore()

    async def run():
        transport = httpx.MockTransport(lambda request: httpx.Response(503, json={"message": "Maintenance"}))
        async with httpx.AsyncClient(transport=transport) as http:
            auth = HttpAuthClient(session, client=http, base_url=BASE_URL)
            controller = SubmissionController(auth, NotificationBridge(notifier))
            return await controller.submit("5551234567", "secret", True)

    state = asyncio.run(run())
    assert state.status == sm.FAILED
    notifier.notify.assert_called_once_with("Maintenance", "error")
