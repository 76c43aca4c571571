from fastapi import Request, status

from src.api.core.constants import WALLET_ADDRESS_HEADER
from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.api.core.models.rate_limit import (
    ClientIdentifier,
    RateLimitClientType,
    RateLimitScope,
)
from src.modules.rate_limit import RateLimiter
from src.utils.logger import get_client_ip, get_logger
from src.utils.settings.rate_limit import RateLimitSettings

logger = get_logger(__name__)


def create_rate_limit_key(request: Request) -> ClientIdentifier:
    """
    Create rate limit client identifier.

    Priority order:
    1. Wallet address header
    2. IP address (fallback)
    """
    wallet_address = request.headers.get(WALLET_ADDRESS_HEADER)
    if wallet_address:
        return ClientIdentifier(
            client_type=RateLimitClientType.WALLET,
            client_id=wallet_address.strip().lower(),
        )

    return ClientIdentifier(
        client_type=RateLimitClientType.IP,
        client_id=get_client_ip(request),
    )


async def check_rate_limit(
    request: Request,
    rate_limiter: RateLimiter,
    scope: RateLimitScope,
    limit: int,
    window_seconds: int,
) -> None:
    """
    Check rate limit for endpoint.

    Raises:
        MarketplaceException: When rate limit is exceeded
    """
    client_identifier = create_rate_limit_key(request)
    result = await rate_limiter.is_allowed(client_identifier, scope, limit, window_seconds)

    if not result.is_allowed:
        retry_after = result.time_to_reset or result.window_seconds
        logger.warning(
            f"Rate limit exceeded for {result.client_identifier}: "
            f"{result.current_count}/{result.limit} in {result.window_seconds}s",
            scope=scope.value,
        )

        raise MarketplaceException(
            MessageCode.RATE_LIMIT_EXCEEDED,
            status.HTTP_429_TOO_MANY_REQUESTS,
            details={
                "limit": result.limit,
                "window_seconds": result.window_seconds,
                "retry_after": retry_after,
                "client_type": result.client_identifier.client_type.value,
            },
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(result.limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(retry_after),
            },
        )


def _settings(request: Request) -> RateLimitSettings:
    return getattr(request.app.state, "rate_limit_settings", None) or RateLimitSettings()


async def _enforce(request: Request, scope: RateLimitScope, limit: int) -> None:
    settings = _settings(request)
    rate_limiter: RateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if not settings.RATE_LIMIT_ENABLED or rate_limiter is None:
        return
    await check_rate_limit(
        request, rate_limiter, scope, limit, settings.RATE_LIMIT_WINDOW_SECONDS
    )


async def read_rate_limit(request: Request) -> None:
    """Dependency limiting read traffic per client."""
    await _enforce(request, RateLimitScope.READ, _settings(request).READ_RATE_LIMIT)


async def write_rate_limit(request: Request) -> None:
    """Dependency limiting write traffic per client."""
    await _enforce(request, RateLimitScope.WRITE, _settings(request).WRITE_RATE_LIMIT)
