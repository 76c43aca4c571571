"""Wallet ownership and agent API key checks."""

import hmac
import re
from typing import Annotated

from fastapi import Depends, Header, status

from src.api.core.constants import (
    AGENT_API_KEY_HEADER,
    WALLET_ADDRESS_HEADER,
    WALLET_ADDRESS_PATTERN,
)
from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.utils.logger import get_logger
from src.utils.settings.chain import ChainSettings

logger = get_logger(__name__)

_WALLET_RE = re.compile(WALLET_ADDRESS_PATTERN)


async def get_wallet_address(
    x_wallet_address: Annotated[str | None, Header(alias=WALLET_ADDRESS_HEADER)] = None,
) -> str:
    """Caller's wallet from the ``X-Wallet-Address`` header, lower-cased."""
    if not x_wallet_address:
        raise MarketplaceException(
            MessageCode.WALLET_ADDRESS_REQUIRED, status.HTTP_401_UNAUTHORIZED
        )
    wallet_address = x_wallet_address.strip()
    if not _WALLET_RE.match(wallet_address):
        raise MarketplaceException(
            MessageCode.WALLET_ADDRESS_REQUIRED,
            status.HTTP_401_UNAUTHORIZED,
            {"description": "X-Wallet-Address is not a valid address"},
        )
    return wallet_address.lower()


def ensure_wallet_owns(wallet_address: str, owner_address: str) -> None:
    """Raise 403 unless the caller's wallet is the resource owner."""
    if wallet_address.lower() != owner_address.lower():
        logger.warning(
            "Wallet address mismatch",
            wallet_address=wallet_address,
            owner_address=owner_address,
        )
        raise MarketplaceException(
            MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
        )


async def require_agent_api_key(
    x_api_key: Annotated[str | None, Header(alias=AGENT_API_KEY_HEADER)] = None,
) -> None:
    expected = ChainSettings().AGENT_API_KEY.get_secret_value()
    # An unset key never matches, including an empty header
    if not expected or not x_api_key or not hmac.compare_digest(
        x_api_key.encode(), expected.encode()
    ):
        raise MarketplaceException(
            MessageCode.INVALID_API_KEY, status.HTTP_401_UNAUTHORIZED
        )


WalletAddressDep = Annotated[str, Depends(get_wallet_address)]
AgentApiKeyDep = Depends(require_agent_api_key)
