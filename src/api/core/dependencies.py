from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.modules.agents.service import AgentService
from src.modules.bids.service import BidService
from src.modules.chain import ChainClient, ChainEventReconciler
from src.modules.coverage.service import AreaOfInterestService, CoverageAreaService
from src.modules.profiles.service import ProviderProfileService
from src.modules.rate_limit import RateLimiter
from src.modules.ratings.service import RatingService
from src.modules.requests.service import RequestService
from src.modules.users.service import UserService


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session from app state."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


AsyncSessionDep = Annotated[AsyncSession, Depends(get_db_session)]


async def get_user_service(db: AsyncSessionDep) -> UserService:
    return UserService(db)


async def get_request_service(db: AsyncSessionDep) -> RequestService:
    return RequestService(db)


async def get_bid_service(db: AsyncSessionDep) -> BidService:
    return BidService(db)


async def get_coverage_area_service(db: AsyncSessionDep) -> CoverageAreaService:
    return CoverageAreaService(db)


async def get_area_of_interest_service(db: AsyncSessionDep) -> AreaOfInterestService:
    return AreaOfInterestService(db)


async def get_provider_profile_service(db: AsyncSessionDep) -> ProviderProfileService:
    return ProviderProfileService(db)


async def get_rating_service(db: AsyncSessionDep) -> RatingService:
    return RatingService(db)


async def get_rate_limiter(request: Request) -> RateLimiter | None:
    return getattr(request.app.state, "rate_limiter", None)


async def get_chain_client(request: Request) -> ChainClient:
    """Chain client built at startup; missing when the agent key is not configured."""
    chain_client = getattr(request.app.state, "chain_client", None)
    if chain_client is None:
        raise MarketplaceException(
            MessageCode.CHAIN_NOT_CONFIGURED,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return chain_client


async def get_reconciler(
    request: Request,
    chain_client: Annotated[ChainClient, Depends(get_chain_client)],
) -> ChainEventReconciler:
    reconciler = getattr(request.app.state, "reconciler", None)
    if reconciler is None:
        reconciler = ChainEventReconciler(chain_client)
    return reconciler


async def get_agent_service(
    db: AsyncSessionDep,
    chain_client: Annotated[ChainClient, Depends(get_chain_client)],
    reconciler: Annotated[ChainEventReconciler, Depends(get_reconciler)],
) -> AgentService:
    return AgentService(db, chain_client, reconciler)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RequestServiceDep = Annotated[RequestService, Depends(get_request_service)]
BidServiceDep = Annotated[BidService, Depends(get_bid_service)]
CoverageAreaServiceDep = Annotated[
    CoverageAreaService, Depends(get_coverage_area_service)
]
AreaOfInterestServiceDep = Annotated[
    AreaOfInterestService, Depends(get_area_of_interest_service)
]
ProviderProfileServiceDep = Annotated[
    ProviderProfileService, Depends(get_provider_profile_service)
]
RatingServiceDep = Annotated[RatingService, Depends(get_rating_service)]
RateLimiterDep = Annotated[RateLimiter | None, Depends(get_rate_limiter)]
AgentServiceDep = Annotated[AgentService, Depends(get_agent_service)]
