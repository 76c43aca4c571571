"""Agent endpoints: escrow transactions signed with the agent key.

201 means the chain confirmed and the mirror was written. 202 means the
chain confirmed but the mirror write failed; the response is not safe to
retry. 502 means the transaction failed and nothing was written.
"""

from fastapi import APIRouter, Response, status

from src.api.agents.schemas import (
    AgentAcceptBidRequest,
    AgentCreateRequest,
    AgentDisputeRequest,
    AgentRequestActionRequest,
    AgentSubmitBidRequest,
    AgentTransactionResponse,
    AgentTransactionResult,
)
from src.api.core.decorators.auth import AgentApiKeyDep
from src.api.core.dependencies import AgentServiceDep
from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import APIResponse, MessageCode
from src.modules.chain import ChainError, ChainFailureReason, ReconciliationResult
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/agents", tags=["agents"], dependencies=[AgentApiKeyDep])

FAILURE_MESSAGE_CODES = {
    ChainFailureReason.REJECTED: MessageCode.CHAIN_TX_REJECTED,
    ChainFailureReason.INSUFFICIENT_FUNDS: MessageCode.CHAIN_INSUFFICIENT_FUNDS,
    ChainFailureReason.REVERTED: MessageCode.CHAIN_TX_REVERTED,
    ChainFailureReason.TIMEOUT: MessageCode.CHAIN_TX_TIMEOUT,
    ChainFailureReason.FAILED: MessageCode.CHAIN_TX_FAILED,
}


def chain_failure(error: ChainError) -> MarketplaceException:
    logger.warning(
        "Chain transaction failed",
        reason=error.reason.value,
        tx_hash=error.tx_hash,
        error=str(error),
    )
    return MarketplaceException(
        FAILURE_MESSAGE_CODES[error.reason],
        status.HTTP_502_BAD_GATEWAY,
        {
            "reason": error.reason.value,
            "transaction_hash": error.tx_hash,
            "retry_safe": True,
        },
    )


def to_response(result: ReconciliationResult, response: Response) -> AgentTransactionResponse:
    data = AgentTransactionResult(
        transaction_hash=result.tx_hash,
        domain_id=result.domain_id,
        id_source=result.id_source,
        id_synthetic=result.id_synthetic,
        persisted=result.persisted,
        retry_safe=False,
        error=str(result.persistence_error.cause) if result.persistence_error else None,
    )
    if result.persisted:
        response.status_code = status.HTTP_201_CREATED
        return APIResponse.success(message_code=MessageCode.RECONCILED, data=data)

    response.status_code = status.HTTP_202_ACCEPTED
    return APIResponse.success(
        message_code=MessageCode.CHAIN_CONFIRMED_MIRROR_FAILED, data=data
    )


@router.post("/create-request", response_model=AgentTransactionResponse)
async def create_request(
    body: AgentCreateRequest,
    response: Response,
    service: AgentServiceDep,
) -> AgentTransactionResponse:
    """Create a request on-chain and mirror it under the emitted request ID."""
    try:
        result = await service.create_request(
            title=body.title,
            description=body.description,
            location_lat=body.location_lat,
            location_lng=body.location_lng,
            budget=body.budget,
            deadline=body.deadline,
            consumer_address=body.wallet_address,
        )
    except ChainError as e:
        raise chain_failure(e) from e
    return to_response(result, response)


@router.post("/submit-bid", response_model=AgentTransactionResponse)
async def submit_bid(
    body: AgentSubmitBidRequest,
    response: Response,
    service: AgentServiceDep,
) -> AgentTransactionResponse:
    try:
        result = await service.submit_bid(
            request_id=body.request_id,
            amount=body.amount,
            timeline_days=body.timeline,
            provider_address=body.provider_address,
        )
    except ChainError as e:
        raise chain_failure(e) from e
    return to_response(result, response)


@router.post("/accept-bid", response_model=AgentTransactionResponse)
async def accept_bid(
    body: AgentAcceptBidRequest,
    response: Response,
    service: AgentServiceDep,
) -> AgentTransactionResponse:
    """Accept a bid, escrowing ``amount`` ether with the contract."""
    try:
        result = await service.accept_bid(body.request_id, body.bid_id, body.amount)
    except ChainError as e:
        raise chain_failure(e) from e
    return to_response(result, response)


@router.post("/deliver-job", response_model=AgentTransactionResponse)
async def deliver_job(
    body: AgentRequestActionRequest,
    response: Response,
    service: AgentServiceDep,
) -> AgentTransactionResponse:
    try:
        result = await service.deliver_job(body.request_id)
    except ChainError as e:
        raise chain_failure(e) from e
    return to_response(result, response)


@router.post("/approve-delivery", response_model=AgentTransactionResponse)
async def approve_delivery(
    body: AgentRequestActionRequest,
    response: Response,
    service: AgentServiceDep,
) -> AgentTransactionResponse:
    """Release escrow to the provider and complete the request."""
    try:
        result = await service.approve_delivery(body.request_id)
    except ChainError as e:
        raise chain_failure(e) from e
    return to_response(result, response)


@router.post("/dispute-delivery", response_model=AgentTransactionResponse)
async def dispute_delivery(
    body: AgentDisputeRequest,
    response: Response,
    service: AgentServiceDep,
) -> AgentTransactionResponse:
    try:
        result = await service.dispute_delivery(body.request_id, body.reason)
    except ChainError as e:
        raise chain_failure(e) from e
    return to_response(result, response)
