from fastapi import APIRouter, Depends, Query, status

from src.api.bids.schemas import (
    BidCreateRequest,
    BidListResponse,
    BidModel,
    BidResponse,
)
from src.api.core.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    WALLET_ADDRESS_PATTERN,
)
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import BidServiceDep
from src.api.core.messages import APIResponse, MessageCode, Paginated, PaginationInfo

router = APIRouter(prefix="/bids", tags=["bids"])


@router.post(
    "",
    response_model=BidResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_rate_limit)],
)
async def create_bid(
    body: BidCreateRequest,
    wallet_address: WalletAddressDep,
    service: BidServiceDep,
) -> BidResponse:
    """Mirror a bid already submitted on-chain under its contract ID."""
    ensure_wallet_owns(wallet_address, body.provider_address)
    bid = await service.upsert_bid(
        bid_id=body.bid_id,
        request_id=body.request_id,
        provider_address=body.provider_address,
        amount=body.amount,
        timeline_days=body.timeline_days,
        status_=body.status,
        tx_hash=body.tx_hash,
    )
    return APIResponse.success(
        message_code=MessageCode.BID_SAVED, data=BidModel.model_validate(bid)
    )


@router.get("", response_model=BidListResponse, dependencies=[Depends(read_rate_limit)])
async def list_bids(
    service: BidServiceDep,
    request_id: int | None = Query(None, gt=0),
    provider_address: str | None = Query(None, pattern=WALLET_ADDRESS_PATTERN),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> BidListResponse:
    bids, total = await service.list_bids(
        request_id=request_id,
        provider_address=provider_address,
        page=page,
        limit=limit,
    )
    return APIResponse.success(
        data=Paginated[BidModel](
            items=[BidModel.model_validate(b) for b in bids],
            pagination=PaginationInfo(
                total=total, page=page, limit=limit, has_more=page * limit < total
            ),
        )
    )
