from fastapi import status
from sqlalchemy import func, select

from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.core.base import BaseService
from src.database.models import Bid, BidStatus, ServiceRequest


class BidService(BaseService):
    async def get_bid(self, bid_id: int) -> Bid | None:
        stmt = select(Bid).where(Bid.bid_id == bid_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _ensure_request_exists(self, request_id: int) -> None:
        stmt = select(ServiceRequest.id).where(ServiceRequest.request_id == request_id)
        if (await self.db.execute(stmt)).scalar_one_or_none() is None:
            raise MarketplaceException(
                MessageCode.REQUEST_NOT_FOUND,
                status.HTTP_404_NOT_FOUND,
                {"request_id": request_id},
            )

    async def upsert_bid(
        self,
        bid_id: int,
        request_id: int,
        provider_address: str,
        amount: str,
        timeline_days: int,
        status_: BidStatus | None = None,
        tx_hash: str | None = None,
        id_synthetic: bool | None = None,
    ) -> Bid:
        """Insert or refresh the bid mirrored under ``bid_id``.

        An existing bid keeps its provider, its status and its synthetic-ID marker.
        """
        await self._ensure_request_exists(request_id)

        provider_address = provider_address.lower()
        bid = await self.get_bid(bid_id)
        if bid is None:
            bid = Bid(
                bid_id=bid_id,
                provider_address=provider_address,
                status=status_ or BidStatus.PENDING,
                id_synthetic=bool(id_synthetic),
            )
            self.db.add(bid)
        else:
            if bid.provider_address != provider_address:
                self.logger.warning(
                    "Bid owned by another wallet",
                    bid_id=bid_id,
                    owner=bid.provider_address,
                    wallet_address=provider_address,
                )
                raise MarketplaceException(
                    MessageCode.WALLET_ADDRESS_MISMATCH,
                    status.HTTP_403_FORBIDDEN,
                    {"bid_id": bid_id},
                )
            if id_synthetic is not None:
                bid.id_synthetic = id_synthetic

        bid.request_id = request_id
        bid.amount = amount
        bid.timeline_days = timeline_days
        if tx_hash is not None:
            bid.tx_hash = tx_hash

        await self.db.commit()
        await self.db.refresh(bid)
        self.logger.info("Bid mirrored", bid_id=bid_id, request_id=request_id)
        return bid

    async def list_bids(
        self,
        request_id: int | None = None,
        provider_address: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Bid], int]:
        conditions = []
        if request_id is not None:
            conditions.append(Bid.request_id == request_id)
        if provider_address:
            conditions.append(Bid.provider_address == provider_address.lower())

        count_stmt = select(func.count()).select_from(Bid).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(Bid)
            .where(*conditions)
            .order_by(Bid.created_at.desc(), Bid.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def update_status(
        self, bid_id: int, status_: BidStatus, commit: bool = True
    ) -> Bid:
        bid = await self.get_bid(bid_id)
        if bid is None:
            raise MarketplaceException(
                MessageCode.BID_NOT_FOUND,
                status.HTTP_404_NOT_FOUND,
                {"bid_id": bid_id},
            )
        bid.status = status_
        if commit:
            await self.db.commit()
            await self.db.refresh(bid)
        return bid
