"""Testes do RedisRateLimitStore com mock."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.stores.redis_rate_limit_store import RedisRateLimitStore
from utils.errors import RedisConnectionError


def _redis_with_pipeline(results: list[object]) -> tuple[MagicMock, MagicMock]:
    async_redis = MagicMock()
    pipeline = MagicMock()
    pipeline.incr.return_value = pipeline
    pipeline.pttl.return_value = pipeline
    pipeline.execute = AsyncMock(return_value=results)
    async_redis.pipeline.return_value = pipeline
    async_redis.pexpire = AsyncMock(return_value=True)
    return async_redis, pipeline


class TestRedisRateLimitStore:
    @pytest.mark.anyio
    async def test_first_hit_sets_window_ttl(self) -> None:
        async_redis, pipeline = _redis_with_pipeline([1, -1])
        store = RedisRateLimitStore(async_redis)

        count, reset_at = await store.hit("203.0.113.7", 60, 1000.0)

        assert (count, reset_at) == (1, 1060.0)
        pipeline.incr.assert_called_once_with("ratelimit:webhook:203.0.113.7")
        async_redis.pexpire.assert_awaited_once_with("ratelimit:webhook:203.0.113.7", 60000)

    @pytest.mark.anyio
    async def test_subsequent_hit_uses_remaining_ttl(self) -> None:
        async_redis, _ = _redis_with_pipeline([5, 15000])
        store = RedisRateLimitStore(async_redis)

        count, reset_at = await store.hit("k", 60, 1000.0)

        assert (count, reset_at) == (5, 1015.0)
        async_redis.pexpire.assert_not_awaited()

    @pytest.mark.anyio
    async def test_key_without_ttl_is_repaired(self) -> None:
        async_redis, _ = _redis_with_pipeline([3, -1])
        store = RedisRateLimitStore(async_redis, prefix="rl:")

        count, reset_at = await store.hit("k", 30, 0.0)

        assert (count, reset_at) == (3, 30.0)
        async_redis.pexpire.assert_awaited_once_with("rl:k", 30000)

    @pytest.mark.anyio
    async def test_redis_failure_is_wrapped(self) -> None:
        async_redis, pipeline = _redis_with_pipeline([])
        pipeline.execute = AsyncMock(side_effect=ConnectionError("down"))
        store = RedisRateLimitStore(async_redis)

        with pytest.raises(RedisConnectionError):
            await store.hit("k", 60, 0.0)
