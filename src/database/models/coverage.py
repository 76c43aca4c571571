"""Provider coverage areas and consumer areas of interest."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class CoverageArea(Base):
    """Service radius declared by a provider. At most three per provider."""

    __tablename__ = "provider_coverage_areas"
    __table_args__ = (
        CheckConstraint("radius > 0 AND radius <= 50000", name="coverage_radius_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    provider_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    location_lat: Mapped[float] = mapped_column(Float, nullable=False)
    location_lng: Mapped[float] = mapped_column(Float, nullable=False)
    radius: Mapped[float] = mapped_column(Float, nullable=False)  # meters
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class AreaOfInterest(Base):
    """Radius a consumer wants providers filtered by. One per consumer."""

    __tablename__ = "consumer_areas_of_interest"
    __table_args__ = (
        CheckConstraint("radius > 0 AND radius <= 50000", name="interest_radius_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    consumer_address: Mapped[str] = mapped_column(
        String(42), unique=True, nullable=False, index=True
    )
    location_lat: Mapped[float] = mapped_column(Float, nullable=False)
    location_lng: Mapped[float] = mapped_column(Float, nullable=False)
    radius: Mapped[float] = mapped_column(Float, nullable=False)  # meters
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
