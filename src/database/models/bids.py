"""Bid model mirrored from the escrow contract."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class BidStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class Bid(Base):
    __tablename__ = "bids"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bid_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False, index=True)
    request_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    provider_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    amount: Mapped[str] = mapped_column(String(78), nullable=False)
    timeline_days: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[BidStatus] = mapped_column(
        String(20), nullable=False, default=BidStatus.PENDING
    )
    tx_hash: Mapped[str | None] = mapped_column(String(66), nullable=True)
    id_synthetic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        CheckConstraint("timeline_days BETWEEN 1 AND 365", name="bid_timeline_range"),
    )
