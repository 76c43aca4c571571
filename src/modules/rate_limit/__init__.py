from .limiter import RateLimiter
from .stores import InMemoryRateLimitStore, RateLimitStore, RedisRateLimitStore

__all__ = [
    "RateLimiter",
    "RateLimitStore",
    "InMemoryRateLimitStore",
    "RedisRateLimitStore",
]
