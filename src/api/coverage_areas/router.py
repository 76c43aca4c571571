from fastapi import APIRouter, Depends, Query, status

from src.api.core.constants import WALLET_ADDRESS_PATTERN
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import CoverageAreaServiceDep
from src.api.core.messages import APIResponse, MessageCode
from src.api.coverage_areas.schemas import (
    CoverageAreaCreateRequest,
    CoverageAreaDeleteResponse,
    CoverageAreaListResponse,
    CoverageAreaModel,
    CoverageAreaResponse,
    CoverageAreaUpdateRequest,
    RatedCoverageAreaModel,
)
from src.modules.coverage.service import RatedCoverageArea

router = APIRouter(prefix="/coverage-areas", tags=["coverage-areas"])


def _rated(entry: RatedCoverageArea) -> RatedCoverageAreaModel:
    return RatedCoverageAreaModel(
        **CoverageAreaModel.model_validate(entry.area).model_dump(),
        average_rating=entry.rating.average_rating,
        rating_count=entry.rating.count,
        distance_meters=entry.distance_meters,
    )


@router.post(
    "",
    response_model=CoverageAreaResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_rate_limit)],
)
async def create_coverage_area(
    body: CoverageAreaCreateRequest,
    wallet_address: WalletAddressDep,
    service: CoverageAreaServiceDep,
) -> CoverageAreaResponse:
    """Add a service radius. A provider may hold at most three."""
    ensure_wallet_owns(wallet_address, body.provider_address)
    area = await service.create_area(
        provider_address=body.provider_address,
        location_lat=body.location_lat,
        location_lng=body.location_lng,
        radius=body.radius,
    )
    return APIResponse.success(
        message_code=MessageCode.COVERAGE_AREA_CREATED,
        data=CoverageAreaModel.model_validate(area),
    )


@router.put("", response_model=CoverageAreaResponse, dependencies=[Depends(write_rate_limit)])
async def update_coverage_area(
    body: CoverageAreaUpdateRequest,
    wallet_address: WalletAddressDep,
    service: CoverageAreaServiceDep,
) -> CoverageAreaResponse:
    area = await service.update_area(
        area_id=body.id,
        wallet_address=wallet_address,
        location_lat=body.location_lat,
        location_lng=body.location_lng,
        radius=body.radius,
    )
    return APIResponse.success(
        message_code=MessageCode.COVERAGE_AREA_UPDATED,
        data=CoverageAreaModel.model_validate(area),
    )


@router.delete(
    "", response_model=CoverageAreaDeleteResponse, dependencies=[Depends(write_rate_limit)]
)
async def delete_coverage_area(
    wallet_address: WalletAddressDep,
    service: CoverageAreaServiceDep,
    area_id: int = Query(..., alias="id"),
) -> CoverageAreaDeleteResponse:
    await service.delete_area(area_id, wallet_address)
    return APIResponse.success(
        message_code=MessageCode.COVERAGE_AREA_DELETED, data={"deleted": True}
    )


@router.get(
    "/nearby",
    response_model=CoverageAreaListResponse,
    dependencies=[Depends(read_rate_limit)],
)
async def nearby_coverage_areas(
    service: CoverageAreaServiceDep,
    consumer_address: str = Query(..., pattern=WALLET_ADDRESS_PATTERN),
) -> CoverageAreaListResponse:
    """Coverage areas overlapping the consumer's area of interest, nearest first.

    Consumers without an area of interest get every coverage area.
    """
    matches = await service.find_nearby(consumer_address)
    return APIResponse.success(data=[_rated(entry) for entry in matches])


@router.get("", response_model=CoverageAreaListResponse, dependencies=[Depends(read_rate_limit)])
async def list_coverage_areas(
    service: CoverageAreaServiceDep,
    provider_address: str | None = Query(None, pattern=WALLET_ADDRESS_PATTERN),
) -> CoverageAreaListResponse:
    """Coverage areas annotated with their provider's average rating."""
    rated = await service.list_areas_with_ratings(provider_address)
    return APIResponse.success(data=[_rated(entry) for entry in rated])
