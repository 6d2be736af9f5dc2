"""Testes do rate limiter de janela fixa."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.infra.stores import MemoryRateLimitStore
from app.services.rate_limiter import RateLimitDecision, RateLimiter
from utils.errors import RedisConnectionError


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _limiter(max_requests: int = 3, window: int = 60) -> tuple[RateLimiter, _Clock]:
    clock = _Clock()
    store = MemoryRateLimitStore(cleanup_probability=0.0)
    return RateLimiter(store, max_requests, window, clock=clock), clock


@pytest.mark.asyncio
async def test_allows_up_to_max_then_rejects() -> None:
    limiter, _ = _limiter(max_requests=3)

    decisions = [await limiter.check("203.0.113.7") for _ in range(4)]

    assert [d.allowed for d in decisions] == [True, True, True, False]
    assert [d.remaining for d in decisions] == [2, 1, 0, 0]


@pytest.mark.asyncio
async def test_rejection_keeps_existing_reset_at() -> None:
    limiter, clock = _limiter(max_requests=1, window=60)

    first = await limiter.check("k")
    clock.now += 20
    rejected = await limiter.check("k")

    assert rejected.allowed is False
    assert rejected.reset_at == first.reset_at == 1060.0
    assert rejected.retry_after(clock.now) == 40


@pytest.mark.asyncio
async def test_window_resets_after_expiry() -> None:
    limiter, clock = _limiter(max_requests=2, window=60)

    for _ in range(3):
        await limiter.check("k")
    clock.now += 60
    decision = await limiter.check("k")

    assert decision.allowed is True
    assert decision.remaining == 1
    assert decision.reset_at == 1120.0


@pytest.mark.asyncio
async def test_keys_are_independent() -> None:
    limiter, _ = _limiter(max_requests=1)

    assert (await limiter.check("a")).allowed is True
    assert (await limiter.check("b")).allowed is True
    assert (await limiter.check("a")).allowed is False


@pytest.mark.asyncio
async def test_store_failure_fails_open() -> None:
    store = AsyncMock()
    store.hit.side_effect = RedisConnectionError("down")
    limiter = RateLimiter(store, 1, 60, clock=_Clock())

    decision = await limiter.check("k")

    assert decision.allowed is True
    assert decision.remaining == 1


def test_retry_after_is_at_least_one_second() -> None:
    decision = RateLimitDecision(allowed=False, remaining=0, reset_at=100.2)

    assert decision.retry_after(100.0) == 1
    assert decision.retry_after(101.0) == 1
    assert decision.retry_after(90.5) == 10


def test_rejects_invalid_configuration() -> None:
    with pytest.raises(ValueError):
        RateLimiter(MemoryRateLimitStore(), 0, 60)
