"""Health check endpoints for debugging and monitoring."""

from fastapi import APIRouter, Request

from src.api.core.dependencies import AsyncSessionDep, RateLimiterDep
from src.modules.health.service import HealthService, OverallHealthStatus

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    request: Request,
    db: AsyncSessionDep,
    rate_limiter: RateLimiterDep,
) -> OverallHealthStatus:
    """Comprehensive health check for all services."""
    health_service = HealthService(
        db,
        rate_limiter=rate_limiter,
        chain_client=getattr(request.app.state, "chain_client", None),
    )
    return await health_service.run_all_checks()


@router.get("/liveness")
async def liveness_check():
    """Simple liveness check - indicates if service is running."""
    return {"status": "alive"}
