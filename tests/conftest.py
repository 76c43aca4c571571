"""Global test configuration and fixtures for the marketplace API."""

import os

# Settings are read at import time; keep tests off any real database or chain
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_BACKEND"] = "memory"
os.environ["CONTRACT_ADDRESS"] = ""
os.environ["AGENT_PRIVATE_KEY"] = ""
os.environ["AGENT_API_KEY"] = "test-agent-key"

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.database.models import Base
from src.modules.chain import ChainEventReconciler
from src.modules.rate_limit import InMemoryRateLimitStore, RateLimiter
from src.utils.settings.rate_limit import RateLimitSettings

from tests.factories import (
    AreaOfInterestFactory,
    BidFactory,
    CoverageAreaFactory,
    ProviderProfileFactory,
    RatingFactory,
    ServiceRequestFactory,
    UserFactory,
)
from tests.utils.chain import FakeChainClient
from tests.utils.constants import (
    AGENT_API_KEY,
    BASE_URL,
    CONSUMER_ADDRESS,
    PROVIDER_ADDRESS,
    SYNTHETIC_CLOCK_SECONDS,
)


@pytest.fixture
def user_factory():
    return UserFactory


@pytest.fixture
def request_factory():
    return ServiceRequestFactory


@pytest.fixture
def bid_factory():
    return BidFactory


@pytest.fixture
def coverage_area_factory():
    return CoverageAreaFactory


@pytest.fixture
def area_of_interest_factory():
    return AreaOfInterestFactory


@pytest.fixture
def profile_factory():
    return ProviderProfileFactory


@pytest.fixture
def rating_factory():
    return RatingFactory


@pytest_asyncio.fixture
async def async_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding and inspecting data outside the app."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def chain_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def rate_limit_settings() -> RateLimitSettings:
    """Rate limiting is off unless a test opts in."""
    return RateLimitSettings(RATE_LIMIT_ENABLED=False)


@pytest_asyncio.fixture
async def app(
    session_factory, chain_client: FakeChainClient, rate_limit_settings: RateLimitSettings
):
    """Create FastAPI application with lifespan manager for testing."""
    from src.main import app

    async with LifespanManager(app):
        app.state.session_factory = session_factory
        app.state.rate_limit_settings = rate_limit_settings
        app.state.rate_limiter = RateLimiter(InMemoryRateLimitStore())
        app.state.chain_client = chain_client
        app.state.reconciler = ChainEventReconciler(
            chain_client,
            timeout_seconds=1.0,
            clock=lambda: SYNTHETIC_CLOCK_SECONDS,
        )
        yield app


# HTTP Client Fixtures
@pytest_asyncio.fixture
async def public_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client without a wallet header."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def wallet_client_factory(app: FastAPI):
    """Factory for HTTP clients acting as a given wallet."""

    def create_client(wallet_address: str) -> AsyncClient:
        return AsyncClient(
            transport=ASGITransport(app=app),
            base_url=BASE_URL,
            headers={"X-Wallet-Address": wallet_address},
        )

    return create_client


@pytest_asyncio.fixture
async def consumer_client(wallet_client_factory) -> AsyncGenerator[AsyncClient, None]:
    async with wallet_client_factory(CONSUMER_ADDRESS) as ac:
        yield ac


@pytest_asyncio.fixture
async def provider_client(wallet_client_factory) -> AsyncGenerator[AsyncClient, None]:
    async with wallet_client_factory(PROVIDER_ADDRESS) as ac:
        yield ac


@pytest_asyncio.fixture
async def agent_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create HTTP client carrying the agent API key."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=BASE_URL,
        headers={"X-API-Key": AGENT_API_KEY},
    ) as ac:
        yield ac
