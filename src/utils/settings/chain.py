"""Chain (escrow contract) settings configuration."""

import re

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


class ChainSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    RPC_URL: str = "http://localhost:8545"
    CHAIN_ID: int = 31337  # anvil
    CONTRACT_ADDRESS: str = ""
    AGENT_PRIVATE_KEY: SecretStr = SecretStr("")
    AGENT_API_KEY: SecretStr = SecretStr("")
    CHAIN_CONFIRMATION_TIMEOUT_SECONDS: float = 30.0
    RPC_REQUEST_TIMEOUT_SECONDS: int = 30

    @field_validator("CONTRACT_ADDRESS")
    @classmethod
    def validate_contract_address(cls, value: str) -> str:
        if value and not _ADDRESS_RE.match(value):
            raise ValueError("CONTRACT_ADDRESS must be a 0x-prefixed 40 hex char address")
        return value

    @property
    def is_configured(self) -> bool:
        return bool(self.CONTRACT_ADDRESS and self.AGENT_PRIVATE_KEY.get_secret_value())
