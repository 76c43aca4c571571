from fastapi import APIRouter, Depends, Query

from src.api.areas_of_interest.schemas import (
    AreaOfInterestDeleteResponse,
    AreaOfInterestListResponse,
    AreaOfInterestLookupResponse,
    AreaOfInterestModel,
    AreaOfInterestRequest,
    AreaOfInterestResponse,
)
from src.api.core.constants import WALLET_ADDRESS_PATTERN
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import AreaOfInterestServiceDep
from src.api.core.messages import APIResponse, MessageCode

router = APIRouter(prefix="/areas-of-interest", tags=["areas-of-interest"])


@router.post("", response_model=AreaOfInterestResponse, dependencies=[Depends(write_rate_limit)])
async def save_area_of_interest(
    body: AreaOfInterestRequest,
    wallet_address: WalletAddressDep,
    service: AreaOfInterestServiceDep,
) -> AreaOfInterestResponse:
    """Create or replace the consumer's single area of interest."""
    ensure_wallet_owns(wallet_address, body.consumer_address)
    area = await service.upsert_area(
        consumer_address=body.consumer_address,
        location_lat=body.location_lat,
        location_lng=body.location_lng,
        radius=body.radius,
    )
    return APIResponse.success(
        message_code=MessageCode.AREA_OF_INTEREST_SAVED,
        data=AreaOfInterestModel.model_validate(area),
    )


@router.get(
    "",
    response_model=AreaOfInterestLookupResponse | AreaOfInterestListResponse,
    dependencies=[Depends(read_rate_limit)],
)
async def get_areas_of_interest(
    service: AreaOfInterestServiceDep,
    consumer_address: str | None = Query(None, pattern=WALLET_ADDRESS_PATTERN),
) -> AreaOfInterestLookupResponse | AreaOfInterestListResponse:
    """One consumer's area of interest, or all of them for the provider dashboard."""
    if consumer_address:
        area = await service.get_area(consumer_address)
        return APIResponse.success(
            data=AreaOfInterestModel.model_validate(area) if area else None
        )
    areas = await service.list_areas()
    return APIResponse.success(
        data=[AreaOfInterestModel.model_validate(a) for a in areas]
    )


@router.delete(
    "", response_model=AreaOfInterestDeleteResponse, dependencies=[Depends(write_rate_limit)]
)
async def delete_area_of_interest(
    wallet_address: WalletAddressDep,
    service: AreaOfInterestServiceDep,
    consumer_address: str = Query(..., pattern=WALLET_ADDRESS_PATTERN),
) -> AreaOfInterestDeleteResponse:
    ensure_wallet_owns(wallet_address, consumer_address)
    deleted = await service.delete_area(consumer_address)
    return APIResponse.success(
        message_code=MessageCode.AREA_OF_INTEREST_DELETED, data={"deleted": deleted}
    )
