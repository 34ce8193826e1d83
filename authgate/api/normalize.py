from typing import Any, Optional

from authgate.core.redirect import intent_from_state

DEFAULT_FORM_ID = "default"

_TRUTHY = {"true", "1", "on", "yes", "checked"}


def _first(payload: dict, *keys: str) -> Any:
    for k in keys:
        v = payload.get(k)
        if v is not None:
            return v
    return None


def _as_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    if isinstance(v, str):
        return v.strip().lower() in _TRUTHY
    return False


def safe_intent_path(path: Any) -> Optional[str]:
    """
    Only same-site paths survive: "/x" is kept; "https://...", "//host" and
    anything else are dropped so the redirect falls back to the home path.
    """
    if not isinstance(path, str):
        return None
    p = path.strip()
    if not p.startswith("/") or p.startswith("//") or "\\" in p:
        return None
    return p


def normalize_login_payload(payload: Optional[dict]) -> dict:
    """
    Accepts the field-name variants different login clients send and
    converts them into the canonical LoginRequest shape:

    {
      "formId": "...",
      "phoneNumber": "...",
      "password": "...",
      "agree": true|false,
      "from": "/path" | null
    }
    """
    if payload is None:
        payload = {}

    form_id = _first(payload, "formId", "form_id", "id") or DEFAULT_FORM_ID
    phone = _first(payload, "phoneNumber", "phone_number", "phone") or ""
    password = _first(payload, "password", "pass") or ""
    agree = _as_bool(_first(payload, "agree", "consent", "acceptTerms", "terms"))

    # Intent variants: top-level string, router location state, or ?next=
    raw_intent = _first(payload, "from", "next", "redirect")
    if raw_intent is None:
        raw_intent = payload.get("state")
    intent = intent_from_state(raw_intent)

    return {
        "formId": str(form_id),
        "phoneNumber": str(phone),
        "password": str(password),
        "agree": agree,
        "from": safe_intent_path(intent.path) if intent else None,
    }
