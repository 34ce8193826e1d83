from fastapi import Header, HTTPException
from authgate.settings import settings
from authgate.observability.logging import log


def require_api_key(x_api_key: str = Header(default="", alias="x-api-key")):
    """
    Guards the login endpoints, not the user: this key identifies the calling
    front end. With API_KEY unset every caller may submit login attempts.
    """
    if not settings.API_KEY:
        return
    if x_api_key != settings.API_KEY:
        log(event="login_api_key_rejected", keyPresent=bool(x_api_key))
        raise HTTPException(status_code=401, detail="Login API key missing or invalid")
