import asyncio
from unittest.mock import patch, MagicMock
from authgate.utils.lock import lock_key, submission_lock

@patch("authgate.utils.lock.get_redis")
def test_lock_acquired_and_released(mock_get_redis):
    mock_redis = MagicMock()
    mock_redis.set.return_value = True
    mock_get_redis.return_value = mock_redis

    async def run():
        async with submission_lock("f1", ttl_ms=1000) as acquired:
            assert mock_redis.eval.call_count == 0
            return acquired

    assert asyncio.run(run()) is True
    args, kwargs = mock_redis.set.call_args
    assert args[0] == lock_key("f1") == "lock:login:f1"
    assert kwargs == {"px": 1000, "nx": True}
    token = args[1]
    eval_args = mock_redis.eval.call_args.args
    assert eval_args[1:] == (1, "lock:login:f1", token)

@patch("authgate.utils.lock.get_redis")
def test_lock_held_elsewhere_fails_fast(mock_get_redis):
    mock_redis = MagicMock()
    mock_redis.set.return_value = None
    mock_get_redis.return_value = mock_redis

    async def run():
        async with submission_lock("f1") as acquired:
            return acquired

    assert asyncio.run(run()) is False
    assert mock_redis.set.call_count == 1
    mock_redis.eval.assert_not_called()
