"""In-memory stand-in for the escrow contract client."""

import asyncio
from typing import Any

from src.modules.chain import ChainError, EventDecodeError

CONTRACT_ADDRESS = "0x" + "c0" * 20
SENDER_ADDRESS = "0x" + "a1" * 20


class FakeChainClient:
    """Records submitted transactions and serves scripted receipts.

    Events queued with ``emit`` land in the receipt of the next submitted
    transaction. Logs are plain dicts; ``decode_event`` only understands logs
    carrying a matching ``event`` name and ``args``.
    """

    def __init__(
        self,
        contract_address: str = CONTRACT_ADDRESS,
        sender_address: str = SENDER_ADDRESS,
    ):
        self.contract_address = contract_address
        self.sender_address = sender_address
        self.submitted: list[tuple[str, list, int]] = []
        self.receipts: dict[str, dict[str, Any]] = {}
        self.submit_error: ChainError | None = None
        self.receipt_status = 1
        self.confirmation_delay = 0.0
        self._pending_logs: list[dict[str, Any]] = []

    def emit(self, event_name: str, address: str | None = None, **args: Any) -> None:
        self._pending_logs.append(
            {"address": address or self.contract_address, "event": event_name, "args": args}
        )

    def emit_raw(self, log: dict[str, Any]) -> None:
        self._pending_logs.append(log)

    async def submit_transaction(
        self, function_name: str, args: list, value: int = 0
    ) -> str:
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append((function_name, list(args), value))
        tx_hash = f"0x{len(self.submitted):064x}"
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "status": self.receipt_status,
            "logs": self._pending_logs,
        }
        self._pending_logs = []
        return tx_hash

    async def wait_for_confirmation(self, tx_hash: str, timeout: float) -> dict[str, Any]:
        if self.confirmation_delay:
            await asyncio.sleep(self.confirmation_delay)
        return self.receipts[tx_hash]

    def decode_event(self, event_name: str, log: dict[str, Any]) -> dict[str, Any]:
        if log.get("event") != event_name or "args" not in log:
            raise EventDecodeError(f"Log is not a {event_name} event")
        return log["args"]
