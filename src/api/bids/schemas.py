"""Bid API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.core.constants import MAX_TIMELINE_DAYS, MIN_TIMELINE_DAYS
from src.api.core.messages import APIResponse, Paginated
from src.api.core.types import WalletAddress, WeiAmount
from src.database.models import BidStatus


class BidModel(BaseModel):
    id: int
    bid_id: int
    request_id: int
    provider_address: str
    amount: str
    timeline_days: int
    status: BidStatus
    tx_hash: str | None = None
    id_synthetic: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class BidCreateRequest(BaseModel):
    bid_id: int = Field(..., gt=0)
    request_id: int = Field(..., gt=0)
    provider_address: WalletAddress
    amount: WeiAmount
    timeline_days: int = Field(..., ge=MIN_TIMELINE_DAYS, le=MAX_TIMELINE_DAYS)
    status: BidStatus | None = None
    tx_hash: str | None = Field(None, pattern=r"^0x[a-fA-F0-9]{64}$")


BidResponse = APIResponse[BidModel]
BidListResponse = APIResponse[Paginated[BidModel]]
