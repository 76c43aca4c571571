"""Provider rating model."""

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Rating(Base):
    """Consumer rating of a provider for a completed request."""

    __tablename__ = "ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    provider_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    consumer_address: Mapped[str] = mapped_column(String(42), nullable=False)
    request_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        # One rating per consumer, provider and job
        UniqueConstraint(
            "consumer_address",
            "provider_address",
            "request_id",
            name="unique_rating_per_request",
        ),
        CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
    )
