"""Rate limiting types and models."""

from enum import Enum

from pydantic import BaseModel


class RateLimitClientType(str, Enum):
    """Types of clients for rate limiting."""

    WALLET = "wallet"
    IP = "ip"


class RateLimitScope(str, Enum):
    """Read and write traffic are counted separately."""

    READ = "read"
    WRITE = "write"


# Cache keys: rate_limit:{scope}:{client_type}:{identifier}
# - rate_limit:write:wallet:0xabc...
# - rate_limit:read:ip:1.2.3.4


class ClientIdentifier(BaseModel):
    """Client identifier for rate limiting."""

    client_type: RateLimitClientType
    client_id: str

    def to_cache_key(self, scope: RateLimitScope) -> str:
        """Generate the store key for this client and scope."""
        return f"rate_limit:{scope.value}:{self.client_type.value}:{self.client_id}"

    def __str__(self) -> str:
        return f"{self.client_type.value}:{self.client_id}"


class RateLimitResult(BaseModel):
    """Result of rate limit check."""

    is_allowed: bool
    current_count: int
    time_to_reset: int | None
    client_identifier: ClientIdentifier
    limit: int
    window_seconds: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.current_count)
