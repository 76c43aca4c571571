from fastapi import APIRouter, Depends, Query, status

from src.api.core.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    WALLET_ADDRESS_PATTERN,
)
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import RequestServiceDep
from src.api.core.messages import APIResponse, MessageCode, Paginated, PaginationInfo
from src.api.requests.schemas import (
    ServiceRequestCreateRequest,
    ServiceRequestListResponse,
    ServiceRequestModel,
    ServiceRequestResponse,
)
from src.database.models import RequestStatus
from src.modules.requests.service import ensure_future_deadline

router = APIRouter(prefix="/requests", tags=["requests"])


@router.post(
    "",
    response_model=ServiceRequestResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_rate_limit)],
)
async def create_request(
    body: ServiceRequestCreateRequest,
    wallet_address: WalletAddressDep,
    service: RequestServiceDep,
) -> ServiceRequestResponse:
    """Mirror a request already created on-chain under its contract ID."""
    ensure_wallet_owns(wallet_address, body.consumer_address)
    if await service.get_request(body.request_id) is None:
        ensure_future_deadline(body.deadline)
    request = await service.upsert_request(
        request_id=body.request_id,
        consumer_address=body.consumer_address,
        title=body.title,
        description=body.description,
        location_lat=body.location_lat,
        location_lng=body.location_lng,
        budget=body.budget,
        deadline=body.deadline,
        status_=body.status,
        tx_hash=body.tx_hash,
    )
    return APIResponse.success(
        message_code=MessageCode.REQUEST_SAVED,
        data=ServiceRequestModel.model_validate(request),
    )


@router.get(
    "",
    response_model=ServiceRequestListResponse,
    dependencies=[Depends(read_rate_limit)],
)
async def list_requests(
    service: RequestServiceDep,
    consumer_address: str | None = Query(None, pattern=WALLET_ADDRESS_PATTERN),
    status_filter: RequestStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> ServiceRequestListResponse:
    """Requests, newest first."""
    requests, total = await service.list_requests(
        consumer_address=consumer_address,
        status_=status_filter,
        page=page,
        limit=limit,
    )
    return APIResponse.success(
        data=Paginated[ServiceRequestModel](
            items=[ServiceRequestModel.model_validate(r) for r in requests],
            pagination=PaginationInfo(
                total=total, page=page, limit=limit, has_more=page * limit < total
            ),
        )
    )
