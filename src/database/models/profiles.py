"""Provider profile model."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ProviderProfile(Base):
    __tablename__ = "provider_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    provider_address: Mapped[str] = mapped_column(
        String(42), unique=True, nullable=False, index=True
    )
    drone_image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    drone_model: Mapped[str | None] = mapped_column(String(200), nullable=True)
    specialization: Mapped[str | None] = mapped_column(String(500), nullable=True)
    offers_ground_imaging: Mapped[bool] = mapped_column(Boolean, default=False)
    # JSON-encoded list, e.g. '["camera", "cell_phone"]'
    ground_imaging_types: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
