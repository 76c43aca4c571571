"""Pluggable counters behind the rate limiter.

``InMemoryRateLimitStore`` serves a single process and takes an injectable
clock for tests. ``RedisRateLimitStore`` shares counts between replicas.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Callable, Protocol

import redis.asyncio as redis

from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class WindowCount:
    """Hits recorded in the current window, including the one just counted."""

    count: int
    time_to_reset: int


class RateLimitStore(Protocol):
    async def hit(self, key: str, limit: int, window_seconds: int) -> WindowCount:
        """Record one hit for ``key`` unless it is already over ``limit``."""
        ...


class InMemoryRateLimitStore:
    """Fixed-window counter kept in process memory."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._windows: dict[str, tuple[int, float]] = {}

    async def hit(self, key: str, limit: int, window_seconds: int) -> WindowCount:
        now = self._clock()
        count, reset_at = self._windows.get(key, (0, 0.0))

        if reset_at <= now:
            count, reset_at = 0, now + window_seconds
            self._prune(now)

        count += 1
        if count <= limit:
            self._windows[key] = (count, reset_at)

        return WindowCount(count=count, time_to_reset=max(0, int(reset_at - now + 0.999)))

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self._windows.items() if reset_at <= now]
        for key in expired:
            del self._windows[key]


class RedisRateLimitStore:
    """Sliding window using a Redis sorted set per key."""

    def __init__(self, redis_client: redis.Redis):
        self.redis_client = redis_client

    async def hit(self, key: str, limit: int, window_seconds: int) -> WindowCount:
        current_time = int(time.time())
        window_start = current_time - window_seconds

        pipe = self.redis_client.pipeline()
        pipe.zremrangebyscore(key, 0, window_start)
        pipe.zcard(key)
        # UUID member keeps concurrent hits in the same second distinct
        member = f"req_{current_time}_{uuid.uuid4().hex}"
        pipe.zadd(key, {member: current_time})
        pipe.expire(key, window_seconds + 1)
        results = await pipe.execute()

        count = results[1] + 1
        if count <= limit:
            return WindowCount(count=count, time_to_reset=window_seconds)

        # Rejected hits are not counted against the window
        await self.redis_client.zrem(key, member)
        oldest = await self.redis_client.zrange(key, 0, 0, withscores=True)
        if oldest:
            time_to_reset = max(0, window_seconds - (current_time - int(oldest[0][1])))
        else:
            time_to_reset = window_seconds
        return WindowCount(count=count, time_to_reset=time_to_reset)
