import time
from typing import Any, Dict, Optional

import httpx

from authgate.core.interfaces import AuthServiceError, Credentials, LoginResult
from authgate.observability.logging import log
from authgate.settings import settings
from authgate.store.session import SessionStore

NETWORK_ERROR_MESSAGE = "Network error"

# Statuses the backend uses for "these credentials are not valid"
REJECTION_STATUSES = (400, 401, 403, 404)


def _json_body(resp: httpx.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _body_message(body: Dict[str, Any]) -> Optional[str]:
    for key in ("message", "error", "detail"):
        val = body.get(key)
        if isinstance(val, str) and val.strip():
            return val.strip()
    return None


class HttpAuthClient:
    """
    Auth capability backed by the credential-verification service.
    On a positive answer it writes the session itself; callers only see
    the LoginResult.
    """

    def __init__(
        self,
        session: SessionStore,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        login_path: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.session = session
        self.client = client
        self.base_url = base_url if base_url is not None else settings.AUTH_SERVICE_URL
        self.login_path = login_path if login_path is not None else settings.AUTH_LOGIN_PATH
        self.timeout = timeout if timeout is not None else settings.AUTH_TIMEOUT_SEC

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.login_path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if settings.AUTH_CLIENT_API_KEY:
            headers["x-client-api-key"] = settings.AUTH_CLIENT_API_KEY
        return headers

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(self.url, json=payload, headers=self._headers())
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, json=payload, headers=self._headers())

    async def login(self, credentials: Credentials) -> LoginResult:
        if not self.base_url:
            log(event="auth_login_skipped_no_url")
            raise AuthServiceError()

        start = time.monotonic()
        log(event="auth_login_attempt", url=self.url, phoneNumber=credentials.phone_digits)
        try:
            resp = await self._post(credentials.to_payload())
        except httpx.TransportError as e:
            log(
                event="auth_login_transport_error",
                elapsedMs=int((time.monotonic() - start) * 1000),
                errorType=type(e).__name__,
                error=str(e)[:300],
            )
            raise AuthServiceError(NETWORK_ERROR_MESSAGE) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        body = _json_body(resp)
        message = _body_message(body)

        if 200 <= resp.status_code < 300:
            success = bool(body.get("success", False))
            log(event="auth_login_response", statusCode=resp.status_code, success=success, elapsedMs=elapsed_ms)
            if success:
                identity = body.get("user") or {"phoneNumber": credentials.phone_digits}
                self.session.set_authenticated(identity)
            return LoginResult(success=success, message=message)

        if resp.status_code in REJECTION_STATUSES:
            log(event="auth_login_rejected", statusCode=resp.status_code, elapsedMs=elapsed_ms)
            return LoginResult(success=False, message=message)

        log(
            event="auth_login_failed",
            statusCode=resp.status_code,
            elapsedMs=elapsed_ms,
            responseText=(resp.text or "")[:300],
        )
        raise AuthServiceError(message)
