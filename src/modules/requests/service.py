from datetime import datetime, timezone

from fastapi import status
from sqlalchemy import func, select

from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.core.base import BaseService
from src.database.models import RequestStatus, ServiceRequest


def ensure_future_deadline(deadline: datetime) -> datetime:
    """Return the deadline as UTC, or raise 400 when it has already passed."""
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    if deadline <= datetime.now(timezone.utc):
        raise MarketplaceException(
            MessageCode.DEADLINE_NOT_IN_FUTURE,
            status.HTTP_400_BAD_REQUEST,
            {"deadline": deadline.isoformat()},
        )
    return deadline


class RequestService(BaseService):
    """Mirror of escrow requests keyed by their on-chain ``request_id``."""

    async def get_request(self, request_id: int) -> ServiceRequest | None:
        stmt = select(ServiceRequest).where(ServiceRequest.request_id == request_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_request(
        self,
        request_id: int,
        consumer_address: str,
        title: str,
        description: str,
        location_lat: float,
        location_lng: float,
        budget: str,
        deadline: datetime,
        status_: RequestStatus | None = None,
        tx_hash: str | None = None,
        id_synthetic: bool | None = None,
    ) -> ServiceRequest:
        """Insert the request, or refresh the mirror when the ID is already known.

        Replaying the same write is a no-op, so callers may retry safely. An
        existing row keeps its owner, its status and its synthetic-ID marker;
        status moves only through the agent transitions.
        """
        consumer_address = consumer_address.lower()
        request = await self.get_request(request_id)
        if request is None:
            request = ServiceRequest(
                request_id=request_id,
                consumer_address=consumer_address,
                status=status_ or RequestStatus.OPEN,
                id_synthetic=bool(id_synthetic),
            )
            self.db.add(request)
        else:
            if request.consumer_address != consumer_address:
                self.logger.warning(
                    "Request owned by another wallet",
                    request_id=request_id,
                    owner=request.consumer_address,
                    wallet_address=consumer_address,
                )
                raise MarketplaceException(
                    MessageCode.WALLET_ADDRESS_MISMATCH,
                    status.HTTP_403_FORBIDDEN,
                    {"request_id": request_id},
                )
            if id_synthetic is not None:
                request.id_synthetic = id_synthetic

        request.title = title
        request.description = description
        request.location_lat = location_lat
        request.location_lng = location_lng
        request.budget = budget
        request.deadline = deadline
        if tx_hash is not None:
            request.tx_hash = tx_hash

        await self.db.commit()
        await self.db.refresh(request)
        self.logger.info(
            "Request mirrored", request_id=request_id, id_synthetic=request.id_synthetic
        )
        return request

    async def list_requests(
        self,
        consumer_address: str | None = None,
        status_: RequestStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[ServiceRequest], int]:
        conditions = []
        if consumer_address:
            conditions.append(ServiceRequest.consumer_address == consumer_address.lower())
        if status_:
            conditions.append(ServiceRequest.status == status_.value)

        count_stmt = select(func.count()).select_from(ServiceRequest).where(*conditions)
        total = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(ServiceRequest)
            .where(*conditions)
            .order_by(ServiceRequest.created_at.desc(), ServiceRequest.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def _require(self, request_id: int) -> ServiceRequest:
        request = await self.get_request(request_id)
        if request is None:
            raise MarketplaceException(
                MessageCode.REQUEST_NOT_FOUND,
                status.HTTP_404_NOT_FOUND,
                {"request_id": request_id},
            )
        return request

    async def update_status(
        self,
        request_id: int,
        status_: RequestStatus,
        accepted_bid_id: int | None = None,
        commit: bool = True,
    ) -> ServiceRequest:
        request = await self._require(request_id)
        request.status = status_
        if accepted_bid_id is not None:
            request.accepted_bid_id = accepted_bid_id
        if commit:
            await self.db.commit()
            await self.db.refresh(request)
        return request
