"""Coverage area API schemas."""

from datetime import datetime

from pydantic import BaseModel

from src.api.core.messages import APIResponse
from src.api.core.types import Latitude, Longitude, RadiusMeters, WalletAddress


class CoverageAreaModel(BaseModel):
    id: int
    provider_address: str
    location_lat: float
    location_lng: float
    radius: float
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RatedCoverageAreaModel(CoverageAreaModel):
    average_rating: float
    rating_count: int
    distance_meters: float | None = None


class CoverageAreaCreateRequest(BaseModel):
    provider_address: WalletAddress
    location_lat: Latitude
    location_lng: Longitude
    radius: RadiusMeters


class CoverageAreaUpdateRequest(BaseModel):
    id: int
    location_lat: Latitude
    location_lng: Longitude
    radius: RadiusMeters


CoverageAreaResponse = APIResponse[CoverageAreaModel]
CoverageAreaListResponse = APIResponse[list[RatedCoverageAreaModel]]
CoverageAreaDeleteResponse = APIResponse[dict[str, bool]]
