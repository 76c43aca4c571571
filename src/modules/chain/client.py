"""Escrow contract access over JSON-RPC."""

import asyncio
from typing import Any, Mapping, Protocol

from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from src.utils.logger import get_logger
from src.utils.settings.chain import ChainSettings

from .abi import ESCROW_ABI
from .errors import ChainError, ChainFailureReason, EventDecodeError, classify_chain_error

logger = get_logger(__name__)

Receipt = Mapping[str, Any]


class ChainClient(Protocol):
    contract_address: str
    sender_address: str

    async def submit_transaction(self, function_name: str, args: list, value: int = 0) -> str:
        """Sign and broadcast a contract call; return the transaction hash."""
        ...

    async def wait_for_confirmation(self, tx_hash: str, timeout: float) -> Receipt:
        """Block until the transaction is mined; return its receipt."""
        ...

    def decode_event(self, event_name: str, log: Mapping[str, Any]) -> dict:
        """Decode one receipt log into the event's arguments or raise EventDecodeError."""
        ...


class Web3ChainClient:
    """Chain client signing with the agent key through web3.py."""

    def __init__(self, settings: ChainSettings):
        self.settings = settings
        self.w3 = Web3(
            Web3.HTTPProvider(
                settings.RPC_URL,
                request_kwargs={"timeout": settings.RPC_REQUEST_TIMEOUT_SECONDS},
            )
        )
        self.contract_address = Web3.to_checksum_address(settings.CONTRACT_ADDRESS)
        self.contract = self.w3.eth.contract(address=self.contract_address, abi=ESCROW_ABI)
        self.account = self.w3.eth.account.from_key(
            settings.AGENT_PRIVATE_KEY.get_secret_value()
        )
        self.sender_address = self.account.address

    def _build_transaction(self, function_name: str, args: list, value: int) -> dict:
        func = getattr(self.contract.functions, function_name)(*args)
        return func.build_transaction(
            {
                "from": self.account.address,
                "nonce": self.w3.eth.get_transaction_count(self.account.address),
                "chainId": self.settings.CHAIN_ID,
                "value": value,
            }
        )

    async def submit_transaction(self, function_name: str, args: list, value: int = 0) -> str:
        try:
            tx = await asyncio.to_thread(self._build_transaction, function_name, args, value)
            signed = self.account.sign_transaction(tx)
            raw_tx_hash = await asyncio.to_thread(
                self.w3.eth.send_raw_transaction, signed.raw_transaction
            )
        except ContractLogicError as e:
            raise ChainError(ChainFailureReason.REVERTED, str(e)) from e
        # RPC transport errors (requests) are OSErrors
        except (Web3Exception, ValueError, OSError) as e:
            raise ChainError(classify_chain_error(e), str(e)) from e

        tx_hash = Web3.to_hex(raw_tx_hash)
        logger.info("Transaction submitted", function=function_name, tx_hash=tx_hash)
        return tx_hash

    async def wait_for_confirmation(self, tx_hash: str, timeout: float) -> Receipt:
        try:
            return await asyncio.to_thread(
                self.w3.eth.wait_for_transaction_receipt, tx_hash, timeout=timeout
            )
        except TimeExhausted as e:
            raise ChainError(ChainFailureReason.TIMEOUT, str(e), tx_hash=tx_hash) from e
        except (Web3Exception, ValueError, OSError) as e:
            raise ChainError(classify_chain_error(e), str(e), tx_hash=tx_hash) from e

    def decode_event(self, event_name: str, log: Mapping[str, Any]) -> dict:
        try:
            event = getattr(self.contract.events, event_name)()
            return dict(event.process_log(log)["args"])
        except (Web3Exception, DecodingError, AttributeError, KeyError, ValueError) as e:
            raise EventDecodeError(str(e)) from e
