"""Agent use cases: submit an escrow transaction, then mirror its effect.

Every operation follows the same shape. The transaction is submitted with
the agent key, the reconciler waits for the receipt, and only then is the
off-chain row written. A chain failure raises ``ChainError`` before anything
is stored; a mirror failure after confirmation comes back in the result.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession
from web3 import Web3

from src.api.core.constants import (
    BID_SUBMITTED_EVENT,
    BID_SUBMITTED_ID_FIELD,
    REQUEST_CREATED_EVENT,
    REQUEST_CREATED_ID_FIELD,
)
from src.core.base import BaseService
from src.database.models import BidStatus, RequestStatus
from src.modules.bids.service import BidService
from src.modules.chain import ChainClient, ChainEventReconciler, ReconciliationResult
from src.modules.requests.service import RequestService, ensure_future_deadline


def ether_to_wei(amount: Decimal) -> int:
    return int(Web3.to_wei(amount, "ether"))


class AgentService(BaseService):
    def __init__(
        self,
        db: AsyncSession,
        chain_client: ChainClient,
        reconciler: ChainEventReconciler,
    ):
        super().__init__(db)
        self.chain_client = chain_client
        self.reconciler = reconciler
        self.requests = RequestService(db)
        self.bids = BidService(db)

    def _rolling_back(
        self, write: Callable[..., Awaitable[Any]]
    ) -> Callable[..., Awaitable[Any]]:
        async def wrapper(*args: Any) -> Any:
            try:
                return await write(*args)
            except Exception:
                await self.db.rollback()
                raise

        return wrapper

    async def create_request(
        self,
        title: str,
        description: str,
        location_lat: float,
        location_lng: float,
        budget: Decimal,
        deadline: datetime,
        consumer_address: str | None = None,
    ) -> ReconciliationResult:
        deadline = ensure_future_deadline(deadline)

        budget_wei = ether_to_wei(budget)
        tx_hash = await self.chain_client.submit_transaction(
            "createRequest",
            [title, description, budget_wei, int(deadline.timestamp())],
        )

        consumer = (consumer_address or self.chain_client.sender_address).lower()

        async def persist(request_id: int, id_synthetic: bool) -> None:
            await self.requests.upsert_request(
                request_id=request_id,
                consumer_address=consumer,
                title=title,
                description=description,
                location_lat=location_lat,
                location_lng=location_lng,
                budget=str(budget_wei),
                deadline=deadline,
                tx_hash=tx_hash,
                id_synthetic=id_synthetic,
            )

        return await self.reconciler.reconcile(
            tx_hash,
            REQUEST_CREATED_EVENT,
            REQUEST_CREATED_ID_FIELD,
            self.chain_client.contract_address,
            self._rolling_back(persist),
        )

    async def submit_bid(
        self,
        request_id: int,
        amount: Decimal,
        timeline_days: int,
        provider_address: str | None = None,
    ) -> ReconciliationResult:
        amount_wei = ether_to_wei(amount)
        tx_hash = await self.chain_client.submit_transaction(
            "submitBid", [request_id, amount_wei, timeline_days]
        )

        provider = (provider_address or self.chain_client.sender_address).lower()

        async def persist(bid_id: int, id_synthetic: bool) -> None:
            await self.bids.upsert_bid(
                bid_id=bid_id,
                request_id=request_id,
                provider_address=provider,
                amount=str(amount_wei),
                timeline_days=timeline_days,
                tx_hash=tx_hash,
                id_synthetic=id_synthetic,
            )

        return await self.reconciler.reconcile(
            tx_hash,
            BID_SUBMITTED_EVENT,
            BID_SUBMITTED_ID_FIELD,
            self.chain_client.contract_address,
            self._rolling_back(persist),
        )

    async def accept_bid(
        self, request_id: int, bid_id: int, amount: Decimal
    ) -> ReconciliationResult:
        tx_hash = await self.chain_client.submit_transaction(
            "acceptBid", [request_id, bid_id], value=ether_to_wei(amount)
        )

        async def persist() -> None:
            await self.requests.update_status(
                request_id, RequestStatus.BID_ACCEPTED, accepted_bid_id=bid_id, commit=False
            )
            await self.bids.update_status(bid_id, BidStatus.ACCEPTED, commit=False)
            await self.db.commit()

        return await self.reconciler.confirm_and_persist(
            tx_hash, request_id, self._rolling_back(persist)
        )

    async def _advance_request(
        self,
        function_name: str,
        request_id: int,
        new_status: RequestStatus,
        args: list | None = None,
        bid_status: BidStatus | None = None,
    ) -> ReconciliationResult:
        tx_hash = await self.chain_client.submit_transaction(
            function_name, args or [request_id]
        )

        async def persist() -> None:
            request = await self.requests.update_status(
                request_id, new_status, commit=False
            )
            if bid_status is not None and request.accepted_bid_id is not None:
                await self.bids.update_status(
                    request.accepted_bid_id, bid_status, commit=False
                )
            await self.db.commit()

        return await self.reconciler.confirm_and_persist(
            tx_hash, request_id, self._rolling_back(persist)
        )

    async def deliver_job(self, request_id: int) -> ReconciliationResult:
        return await self._advance_request("deliverJob", request_id, RequestStatus.DELIVERED)

    async def approve_delivery(self, request_id: int) -> ReconciliationResult:
        return await self._advance_request(
            "approveDelivery",
            request_id,
            RequestStatus.COMPLETED,
            bid_status=BidStatus.COMPLETED,
        )

    async def dispute_delivery(self, request_id: int, reason: str) -> ReconciliationResult:
        return await self._advance_request(
            "disputeDelivery",
            request_id,
            RequestStatus.DISPUTED,
            args=[request_id, reason],
        )
