"""Reusable annotated field types for request schemas."""

from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, Field, StringConstraints

from .constants import (
    BUDGET_PATTERN,
    MAX_COVERAGE_RADIUS_METERS,
    WALLET_ADDRESS_PATTERN,
)

# Stored lower-cased so that lookups are case-insensitive
WalletAddress = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=WALLET_ADDRESS_PATTERN),
    AfterValidator(str.lower),
]

WeiAmount = Annotated[str, StringConstraints(strip_whitespace=True, pattern=BUDGET_PATTERN)]

Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]
RadiusMeters = Annotated[float, Field(gt=0, le=MAX_COVERAGE_RADIUS_METERS)]

# Decimal ether, e.g. "0.1"; converted to wei before reaching the chain
EtherAmount = Annotated[Decimal, Field(gt=0, max_digits=40, decimal_places=18)]
