"""Turns a submitted escrow transaction into an off-chain record.

The contract assigns request and bid IDs, so the mirror row can only be
written once the receipt is in and the matching event has been decoded.
When no event decodes, a wall-clock ID is used instead and the row is
flagged ``id_synthetic`` so it can be repaired later. A failed mirror write
after confirmation is reported, never retried against the chain.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping

from src.utils.logger import get_logger

from .client import ChainClient
from .errors import (
    ChainError,
    ChainFailureReason,
    EventDecodeError,
    PersistenceError,
    ReconciliationGapError,
)

logger = get_logger(__name__)

PersistFn = Callable[[int, bool], Awaitable[Any]]


class IdSource(str, Enum):
    EXTRACTED = "extracted"
    FALLBACK = "fallback"
    KNOWN = "known"


@dataclass
class ReconciliationResult:
    tx_hash: str
    domain_id: int
    id_source: IdSource
    persisted: bool
    persistence_error: PersistenceError | None = None

    @property
    def id_synthetic(self) -> bool:
        return self.id_source == IdSource.FALLBACK


class ChainEventReconciler:
    def __init__(
        self,
        chain_client: ChainClient,
        timeout_seconds: float = 30.0,
        clock: Callable[[], float] = time.time,
    ):
        self.chain_client = chain_client
        self.timeout_seconds = timeout_seconds
        self.clock = clock

    def extract_domain_id(
        self,
        receipt: Mapping[str, Any],
        event_name: str,
        id_field: str,
        contract_address: str,
    ) -> int | None:
        """Return the first non-zero ``id_field`` of ``event_name`` emitted by the contract."""
        expected = contract_address.lower()
        for log in receipt.get("logs") or []:
            if str(log.get("address", "")).lower() != expected:
                continue
            try:
                args = self.chain_client.decode_event(event_name, log)
            except EventDecodeError:
                continue
            value = args.get(id_field)
            if value:
                return int(value)
        return None

    def synthetic_id(self) -> int:
        return int(self.clock() * 1000)

    async def _confirm(self, tx_hash: str) -> Mapping[str, Any]:
        try:
            receipt = await asyncio.wait_for(
                self.chain_client.wait_for_confirmation(tx_hash, self.timeout_seconds),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ChainError(
                ChainFailureReason.TIMEOUT,
                f"Transaction {tx_hash} not confirmed within {self.timeout_seconds}s",
                tx_hash=tx_hash,
            ) from e

        if receipt.get("status") == 0:
            raise ChainError(
                ChainFailureReason.REVERTED,
                f"Transaction {tx_hash} reverted",
                tx_hash=tx_hash,
            )
        return receipt

    async def reconcile(
        self,
        tx_hash: str,
        event_name: str,
        id_field: str,
        contract_address: str,
        persist: PersistFn,
    ) -> ReconciliationResult:
        receipt = await self._confirm(tx_hash)

        domain_id = self.extract_domain_id(receipt, event_name, id_field, contract_address)
        if domain_id is not None:
            id_source = IdSource.EXTRACTED
        else:
            gap = ReconciliationGapError(tx_hash, event_name)
            domain_id = self.synthetic_id()
            id_source = IdSource.FALLBACK
            logger.warning(
                "Reconciliation gap, using synthetic ID",
                tx_hash=tx_hash,
                event_name=event_name,
                synthetic_id=domain_id,
                error=str(gap),
            )

        return await self._persist(
            tx_hash,
            domain_id,
            id_source,
            lambda: persist(domain_id, id_source == IdSource.FALLBACK),
        )

    async def confirm_and_persist(
        self,
        tx_hash: str,
        domain_id: int,
        persist: Callable[[], Awaitable[Any]],
    ) -> ReconciliationResult:
        """Confirm a transaction on an existing record, then mirror its effect."""
        await self._confirm(tx_hash)
        return await self._persist(tx_hash, domain_id, IdSource.KNOWN, persist)

    async def _persist(
        self,
        tx_hash: str,
        domain_id: int,
        id_source: IdSource,
        write: Callable[[], Awaitable[Any]],
    ) -> ReconciliationResult:
        try:
            await write()
        except Exception as e:
            error = PersistenceError(tx_hash, domain_id, e)
            logger.error(
                "Chain confirmed but mirror write failed",
                tx_hash=tx_hash,
                domain_id=domain_id,
                error=str(e),
            )
            return ReconciliationResult(
                tx_hash=tx_hash,
                domain_id=domain_id,
                id_source=id_source,
                persisted=False,
                persistence_error=error,
            )

        logger.info(
            "Transaction reconciled",
            tx_hash=tx_hash,
            domain_id=domain_id,
            id_source=id_source.value,
        )
        return ReconciliationResult(
            tx_hash=tx_hash, domain_id=domain_id, id_source=id_source, persisted=True
        )
