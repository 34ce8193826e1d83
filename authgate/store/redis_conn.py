from typing import Optional

from redis import Redis
from authgate.settings import settings


def get_redis(url: Optional[str] = None) -> Redis:
    """Client for the submission lock and the form-status records."""
    timeout = settings.REDIS_SOCKET_TIMEOUT_SEC
    return Redis.from_url(
        url or settings.REDIS_URL,
        decode_responses=True,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )
