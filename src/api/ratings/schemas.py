"""Rating API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.core.constants import MAX_COMMENT_LENGTH, MAX_RATING, MIN_RATING
from src.api.core.messages import APIResponse
from src.api.core.types import WalletAddress


class RatingModel(BaseModel):
    id: int
    provider_address: str
    consumer_address: str
    request_id: int
    rating: int
    comment: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class RatingCreateRequest(BaseModel):
    provider_address: WalletAddress
    consumer_address: WalletAddress
    request_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: str | None = Field(None, max_length=MAX_COMMENT_LENGTH)


class ProviderRatings(BaseModel):
    ratings: list[RatingModel]
    average_rating: float
    count: int


RatingResponse = APIResponse[RatingModel]
ProviderRatingsResponse = APIResponse[ProviderRatings]
