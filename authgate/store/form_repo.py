import json
import time
from typing import Optional

from authgate.core.state_machine import SubmissionState
from authgate.settings import settings
from authgate.store.redis_conn import get_redis

PREFIX = "login:form:"


def _key(form_id: str) -> str:
    return f"{PREFIX}{form_id}:status"


def save_form_status(form_id: str, state: SubmissionState, redirect: Optional[str] = None) -> None:
    """Last outcome per form. Credentials are never written."""
    if not settings.STORE_FORM_STATUS:
        return
    record = {
        "formId": form_id,
        "status": state.status,
        "reason": state.reason,
        "redirect": redirect,
        "updatedAtEpoch": int(time.time()),
    }
    r = get_redis()
    r.set(_key(form_id), json.dumps(record), ex=int(settings.FORM_STATUS_TTL_SEC))


def load_form_status(form_id: str) -> Optional[dict]:
    r = get_redis()
    raw = r.get(_key(form_id))
    if not raw:
        return None
    return json.loads(raw)
