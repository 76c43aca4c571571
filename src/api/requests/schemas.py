"""Service request API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.api.core.constants import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH
from src.api.core.messages import APIResponse, Paginated
from src.api.core.types import Latitude, Longitude, WalletAddress, WeiAmount
from src.database.models import RequestStatus


class ServiceRequestModel(BaseModel):
    id: int
    request_id: int
    consumer_address: str
    title: str
    description: str
    location_lat: float
    location_lng: float
    budget: str
    deadline: datetime
    status: RequestStatus
    accepted_bid_id: int | None = None
    tx_hash: str | None = None
    id_synthetic: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ServiceRequestCreateRequest(BaseModel):
    request_id: int = Field(..., gt=0)
    consumer_address: WalletAddress
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str = Field(..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    location_lat: Latitude
    location_lng: Longitude
    budget: WeiAmount
    deadline: datetime
    status: RequestStatus | None = None
    tx_hash: str | None = Field(None, pattern=r"^0x[a-fA-F0-9]{64}$")


ServiceRequestResponse = APIResponse[ServiceRequestModel]
ServiceRequestListResponse = APIResponse[Paginated[ServiceRequestModel]]
