"""Consumer area-of-interest API schemas."""

from datetime import datetime

from pydantic import BaseModel

from src.api.core.messages import APIResponse
from src.api.core.types import Latitude, Longitude, RadiusMeters, WalletAddress


class AreaOfInterestModel(BaseModel):
    id: int
    consumer_address: str
    location_lat: float
    location_lng: float
    radius: float
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AreaOfInterestRequest(BaseModel):
    consumer_address: WalletAddress
    location_lat: Latitude
    location_lng: Longitude
    radius: RadiusMeters


AreaOfInterestResponse = APIResponse[AreaOfInterestModel]
AreaOfInterestLookupResponse = APIResponse[AreaOfInterestModel | None]
AreaOfInterestListResponse = APIResponse[list[AreaOfInterestModel]]
AreaOfInterestDeleteResponse = APIResponse[dict[str, bool]]
