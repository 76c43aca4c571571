"""Counter stores behind the rate limiter."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.modules.rate_limit import InMemoryRateLimitStore, RedisRateLimitStore


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


async def test_in_memory_counts_hits_within_window(clock):
    store = InMemoryRateLimitStore(clock=clock)

    counts = [(await store.hit("k", 3, 60)).count for _ in range(3)]

    assert counts == [1, 2, 3]


async def test_in_memory_rejected_hits_are_not_recorded(clock):
    store = InMemoryRateLimitStore(clock=clock)
    await store.hit("k", 1, 60)

    assert (await store.hit("k", 1, 60)).count == 2
    assert (await store.hit("k", 1, 60)).count == 2


async def test_in_memory_window_resets(clock):
    store = InMemoryRateLimitStore(clock=clock)
    await store.hit("k", 1, 60)

    clock.now += 30
    rejected = await store.hit("k", 1, 60)
    assert rejected.count == 2
    assert rejected.time_to_reset == 30

    clock.now += 30
    assert (await store.hit("k", 1, 60)).count == 1


async def test_in_memory_keys_are_independent(clock):
    store = InMemoryRateLimitStore(clock=clock)
    await store.hit("a", 1, 60)

    assert (await store.hit("b", 1, 60)).count == 1


def _redis_client(zcard: int, oldest_score: float | None = None) -> MagicMock:
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[0, zcard, 1, True])
    client = MagicMock()
    client.pipeline.return_value = pipe
    client.zrem = AsyncMock(return_value=1)
    client.zrange = AsyncMock(
        return_value=[(b"req", oldest_score)] if oldest_score is not None else []
    )
    return client


async def test_redis_allows_under_limit():
    client = _redis_client(zcard=1)
    store = RedisRateLimitStore(client)

    window = await store.hit("k", 5, 60)

    assert window.count == 2
    client.zrem.assert_not_awaited()


async def test_redis_removes_rejected_member():
    client = _redis_client(zcard=5, oldest_score=990.0)
    store = RedisRateLimitStore(client)

    with patch("src.modules.rate_limit.stores.time.time", return_value=1_000.0):
        window = await store.hit("k", 5, 60)

    assert window.count == 6
    assert window.time_to_reset == 50
    client.zrem.assert_awaited_once()
