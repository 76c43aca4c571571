"""Test factories for marketplace models."""

from .base import AsyncSQLAlchemyModelFactory, wallet_address
from .coverage import (
    AreaOfInterestFactory,
    CoverageAreaFactory,
    ProviderProfileFactory,
    RatingFactory,
)
from .requests import BidFactory, ServiceRequestFactory
from .users import UserFactory

__all__ = [
    "AsyncSQLAlchemyModelFactory",
    "wallet_address",
    "UserFactory",
    "ServiceRequestFactory",
    "BidFactory",
    "CoverageAreaFactory",
    "AreaOfInterestFactory",
    "ProviderProfileFactory",
    "RatingFactory",
]
