import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.models.rate_limit import (
    ClientIdentifier,
    RateLimitClientType,
    RateLimitScope,
)
from src.modules.chain import ChainClient
from src.modules.rate_limit import RateLimiter
from src.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass
class HealthCheckResult:
    """Result of a health check."""

    service: str
    status: Literal["healthy", "unhealthy", "degraded"]
    connected: bool
    details: dict
    error: str | None = None


@dataclass
class OverallHealthStatus:
    """Overall health status with individual service results."""

    status: Literal["healthy", "degraded", "unhealthy"]
    services: dict[str, HealthCheckResult]
    timestamp: str


class HealthService:
    """Service for performing health checks on various system components."""

    def __init__(
        self,
        db: AsyncSession,
        rate_limiter: RateLimiter | None = None,
        chain_client: ChainClient | None = None,
    ):
        self.db = db
        self.rate_limiter = rate_limiter
        self.chain_client = chain_client

    async def check_database_health(self) -> HealthCheckResult:
        """Database connection health check."""
        try:
            result = await self.db.execute(text("SELECT 1 as test"))
            test_value = result.scalar()

            return HealthCheckResult(
                service="database",
                status="healthy",
                connected=True,
                details={"test_query_result": test_value},
            )
        except Exception as e:
            logger.error(f"Database health check error: {e}")
            return HealthCheckResult(
                service="database",
                status="unhealthy",
                connected=False,
                details={},
                error=str(e),
            )

    async def check_rate_limit_health(self) -> HealthCheckResult:
        """Rate limiter store round trip. The limiter fails open, so errors only degrade."""
        if self.rate_limiter is None:
            return HealthCheckResult(
                service="rate_limit",
                status="degraded",
                connected=False,
                details={"configured": False},
            )
        try:
            test_client = ClientIdentifier(
                client_type=RateLimitClientType.IP,
                client_id="health_check_test",
            )
            store = self.rate_limiter.store
            window = await store.hit(test_client.to_cache_key(RateLimitScope.READ), 1_000_000, 1)
            return HealthCheckResult(
                service="rate_limit",
                status="healthy",
                connected=True,
                details={"store": type(store).__name__, "count": window.count},
            )
        except Exception as e:
            logger.error(f"Rate limit health check error: {e}")
            return HealthCheckResult(
                service="rate_limit",
                status="degraded",
                connected=False,
                details={},
                error=str(e),
            )

    async def check_chain_health(self) -> HealthCheckResult:
        """RPC reachability. Only agent endpoints depend on it."""
        if self.chain_client is None:
            return HealthCheckResult(
                service="chain",
                status="degraded",
                connected=False,
                details={"configured": False},
            )
        try:
            w3 = getattr(self.chain_client, "w3", None)
            connected = bool(await asyncio.to_thread(w3.is_connected)) if w3 else True
            return HealthCheckResult(
                service="chain",
                status="healthy" if connected else "degraded",
                connected=connected,
                details={"contract_address": self.chain_client.contract_address},
            )
        except Exception as e:
            logger.error(f"Chain health check error: {e}")
            return HealthCheckResult(
                service="chain",
                status="degraded",
                connected=False,
                details={},
                error=str(e),
            )

    async def run_all_checks(self) -> OverallHealthStatus:
        """Run all health checks in parallel and return overall status."""
        tasks = [
            self.check_database_health(),
            self.check_rate_limit_health(),
            self.check_chain_health(),
        ]

        results = await asyncio.gather(*tasks, return_exceptions=True)

        services = {}
        overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"

        for result in results:
            if isinstance(result, Exception):
                service_result = HealthCheckResult(
                    service=result.__class__.__name__,
                    status="unhealthy",
                    connected=False,
                    details={},
                    error=str(result),
                )
                overall_status = "unhealthy"
            else:
                service_result = result
                if service_result.status == "unhealthy":
                    overall_status = "unhealthy"
                elif (
                    service_result.status == "degraded" and overall_status == "healthy"
                ):
                    overall_status = "degraded"

            services[service_result.service] = service_result

        return OverallHealthStatus(
            status=overall_status,
            services=services,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
