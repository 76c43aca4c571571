"""Agent API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TIMELINE_DAYS,
    MAX_TITLE_LENGTH,
    MIN_TIMELINE_DAYS,
)
from src.api.core.messages import APIResponse
from src.api.core.types import EtherAmount, Latitude, Longitude, WalletAddress
from src.modules.chain import IdSource


class AgentCreateRequest(BaseModel):
    wallet_address: WalletAddress | None = None
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    location_lat: Latitude
    location_lng: Longitude
    budget: EtherAmount
    deadline: datetime


class AgentSubmitBidRequest(BaseModel):
    request_id: int = Field(..., gt=0)
    provider_address: WalletAddress | None = None
    amount: EtherAmount
    timeline: int = Field(..., ge=MIN_TIMELINE_DAYS, le=MAX_TIMELINE_DAYS)


class AgentAcceptBidRequest(BaseModel):
    request_id: int = Field(..., gt=0)
    bid_id: int = Field(..., gt=0)
    amount: EtherAmount


class AgentRequestActionRequest(BaseModel):
    request_id: int = Field(..., gt=0)


class AgentDisputeRequest(AgentRequestActionRequest):
    reason: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)


class AgentTransactionResult(BaseModel):
    transaction_hash: str
    domain_id: int
    id_source: IdSource
    id_synthetic: bool
    persisted: bool
    # False once value has moved on-chain; resubmitting would duplicate it
    retry_safe: bool
    error: str | None = None


AgentTransactionResponse = APIResponse[AgentTransactionResult]
