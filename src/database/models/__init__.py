"""Database models for the drone marketplace API."""

from .base import Base
from .bids import Bid, BidStatus
from .coverage import AreaOfInterest, CoverageArea
from .profiles import ProviderProfile
from .ratings import Rating
from .requests import RequestStatus, ServiceRequest
from .users import User, UserType

# Export all models and enums
__all__ = [
    # Base
    "Base",
    # Enums
    "UserType",
    "RequestStatus",
    "BidStatus",
    # Models
    "User",
    "ServiceRequest",
    "Bid",
    "CoverageArea",
    "AreaOfInterest",
    "ProviderProfile",
    "Rating",
]
