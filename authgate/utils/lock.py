import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

from starlette.concurrency import run_in_threadpool

from authgate.settings import settings
from authgate.store.redis_conn import get_redis

_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


def lock_key(form_id: str) -> str:
    return f"lock:login:{form_id}"


@asynccontextmanager
async def submission_lock(form_id: str, ttl_ms: int = 0) -> AsyncIterator[bool]:
    """
    Single in-flight submission per formId across processes.
    Yields False immediately when another submission holds the lock; callers
    must treat that as a no-op (there is no queueing).
    """
    r = get_redis()
    key = lock_key(form_id)
    token = uuid.uuid4().hex
    ttl = int(ttl_ms or settings.SUBMISSION_LOCK_TTL_MS)
    acquired = bool(await run_in_threadpool(r.set, key, token, px=ttl, nx=True))

    try:
        yield acquired
    finally:
        if acquired:
            # Release only if we still own it
            await run_in_threadpool(r.eval, _RELEASE_SCRIPT, 1, key, token)
