from fastapi import APIRouter, Depends, Query, status

from src.api.core.constants import WALLET_ADDRESS_PATTERN
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import RatingServiceDep
from src.api.core.messages import APIResponse, MessageCode
from src.api.ratings.schemas import (
    ProviderRatings,
    ProviderRatingsResponse,
    RatingCreateRequest,
    RatingModel,
    RatingResponse,
)

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post(
    "",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_rate_limit)],
)
async def create_rating(
    body: RatingCreateRequest,
    wallet_address: WalletAddressDep,
    service: RatingServiceDep,
) -> RatingResponse:
    """Rate a provider. Ratings are never edited or removed."""
    ensure_wallet_owns(wallet_address, body.consumer_address)
    rating = await service.create_rating(
        provider_address=body.provider_address,
        consumer_address=body.consumer_address,
        request_id=body.request_id,
        rating=body.rating,
        comment=body.comment,
    )
    return APIResponse.success(
        message_code=MessageCode.RATING_CREATED, data=RatingModel.model_validate(rating)
    )


@router.get("", response_model=ProviderRatingsResponse, dependencies=[Depends(read_rate_limit)])
async def list_ratings(
    service: RatingServiceDep,
    provider_address: str = Query(..., pattern=WALLET_ADDRESS_PATTERN),
) -> ProviderRatingsResponse:
    ratings, summary = await service.list_ratings(provider_address)
    return APIResponse.success(
        data=ProviderRatings(
            ratings=[RatingModel.model_validate(r) for r in ratings],
            average_rating=summary.average_rating,
            count=summary.count,
        )
    )
