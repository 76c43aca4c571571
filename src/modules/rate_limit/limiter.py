from src.api.core.models.rate_limit import (
    ClientIdentifier,
    RateLimitResult,
    RateLimitScope,
)
from src.utils.logger import get_logger

from .stores import RateLimitStore

logger = get_logger(__name__)


class RateLimiter:
    """Rate limiter over an injected counter store."""

    def __init__(self, store: RateLimitStore):
        self.store = store

    async def is_allowed(
        self,
        client_identifier: ClientIdentifier,
        scope: RateLimitScope,
        limit: int,
        window_seconds: int,
    ) -> RateLimitResult:
        """
        Check if request is allowed within rate limit.

        Args:
            client_identifier: Typed client identifier for rate limiting
            scope: Read or write bucket
            limit: Maximum requests allowed
            window_seconds: Time window in seconds

        Returns:
            RateLimitResult: Typed result with rate limit information
        """
        key = client_identifier.to_cache_key(scope)
        try:
            window = await self.store.hit(key, limit, window_seconds)
        except Exception as e:
            logger.error(f"Rate limiter error for client {client_identifier}: {e}")
            # Fail open - allow request if the store is down
            return RateLimitResult(
                is_allowed=True,
                current_count=0,
                time_to_reset=None,
                client_identifier=client_identifier,
                limit=limit,
                window_seconds=window_seconds,
            )

        is_allowed = window.count <= limit
        return RateLimitResult(
            is_allowed=is_allowed,
            current_count=min(window.count, limit) if not is_allowed else window.count,
            time_to_reset=None if is_allowed else window.time_to_reset,
            client_identifier=client_identifier,
            limit=limit,
            window_seconds=window_seconds,
        )
