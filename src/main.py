import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.core.exceptions.base import register_exception_handlers
from src.api.core.middleware.logging import logging_middleware
from src.api.core.middleware.security import (
    SecurityHeadersMiddleware,
    PayloadSizeMiddleware,
)
from src.api.router import api_router
from src.database.connection import AsyncSessionLocal, create_tables
from src.modules.chain import ChainEventReconciler, Web3ChainClient
from src.modules.rate_limit import (
    InMemoryRateLimitStore,
    RateLimiter,
    RedisRateLimitStore,
)
from src.redis.client import close_redis_pool, get_redis_client
from src.utils.logger import setup_logging
from src.utils.settings.app import AppSettings
from src.utils.settings.chain import ChainSettings
from src.utils.settings.rate_limit import RateLimitSettings

app_settings = AppSettings()
is_production = app_settings.is_production


def build_rate_limiter(settings: RateLimitSettings) -> RateLimiter:
    if settings.RATE_LIMIT_BACKEND == "redis":
        return RateLimiter(RedisRateLimitStore(get_redis_client()))
    return RateLimiter(InMemoryRateLimitStore())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger = setup_logging(is_production)
    logger.info("Starting Drone Marketplace API...")
    app_settings.validate_prod()

    await create_tables()
    app.state.session_factory = AsyncSessionLocal
    logger.info("Database session factory added to app state")

    rate_limit_settings = RateLimitSettings()
    app.state.rate_limit_settings = rate_limit_settings
    app.state.rate_limiter = build_rate_limiter(rate_limit_settings)
    logger.info("Rate limiter ready", backend=rate_limit_settings.RATE_LIMIT_BACKEND)

    chain_settings = ChainSettings()
    if chain_settings.is_configured:
        chain_client = Web3ChainClient(chain_settings)
        app.state.chain_client = chain_client
        app.state.reconciler = ChainEventReconciler(
            chain_client,
            timeout_seconds=chain_settings.CHAIN_CONFIRMATION_TIMEOUT_SECONDS,
        )
        logger.info(
            "Chain client ready",
            contract_address=chain_client.contract_address,
            chain_id=chain_settings.CHAIN_ID,
        )
    else:
        app.state.chain_client = None
        app.state.reconciler = None
        logger.warning("Agent chain access not configured, agent endpoints disabled")

    yield

    # Shutdown
    if rate_limit_settings.RATE_LIMIT_BACKEND == "redis":
        await close_redis_pool()
    logger.info("Shutting down Drone Marketplace API...")


app = FastAPI(
    title="Drone Marketplace API",
    description="Off-chain mirror and agent gateway for the drone job escrow",
    version=app_settings.API_VERSION,
    lifespan=lifespan,
    # Security: Disable docs in production
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
    openapi_url=None if is_production else "/openapi.json",
)

# Register global exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
app.add_middleware(PayloadSizeMiddleware, max_request_size=app_settings.MAX_REQUEST_SIZE)
app.middleware("http")(logging_middleware)

app.include_router(api_router)


def run_dev_server():
    """Run development server with auto-reload."""
    uvicorn.run(
        "src.main:app", host="0.0.0.0", port=8010, reload=True, access_log=False
    )


def run_prod_server():
    """Run production server."""
    uvicorn.run(
        "src.main:app", host="0.0.0.0", port=8010, reload=False, access_log=False
    )
