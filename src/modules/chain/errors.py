from enum import Enum


class ChainFailureReason(str, Enum):
    REJECTED = "rejected"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    REVERTED = "reverted"
    TIMEOUT = "timeout"
    FAILED = "failed"


class ChainError(Exception):
    """A transaction that did not confirm successfully. Nothing was mirrored."""

    def __init__(self, reason: ChainFailureReason, message: str = "", tx_hash: str | None = None):
        self.reason = reason
        self.tx_hash = tx_hash
        super().__init__(message or reason.value)


class ReconciliationGapError(Exception):
    """No decodable domain event was found in a confirmed receipt."""

    def __init__(self, tx_hash: str, event_name: str):
        self.tx_hash = tx_hash
        self.event_name = event_name
        super().__init__(f"No {event_name} event decoded for transaction {tx_hash}")


class PersistenceError(Exception):
    """The off-chain mirror write failed after the chain confirmed."""

    def __init__(self, tx_hash: str, domain_id: int, cause: Exception):
        self.tx_hash = tx_hash
        self.domain_id = domain_id
        self.cause = cause
        super().__init__(f"Failed to persist {domain_id} for {tx_hash}: {cause}")


def classify_chain_error(exc: BaseException) -> ChainFailureReason:
    """Best-effort reason from the node or wallet error message."""
    if isinstance(exc, ChainError):
        return exc.reason
    if isinstance(exc, TimeoutError):
        return ChainFailureReason.TIMEOUT

    message = str(exc).lower()
    if "user rejected" in message or "user denied" in message:
        return ChainFailureReason.REJECTED
    if "insufficient funds" in message:
        return ChainFailureReason.INSUFFICIENT_FUNDS
    if "revert" in message:
        return ChainFailureReason.REVERTED
    if "timeout" in message or "timed out" in message or "not in the chain after" in message:
        return ChainFailureReason.TIMEOUT
    return ChainFailureReason.FAILED


class EventDecodeError(Exception):
    """A log could not be decoded as the requested event."""
