from .client import ChainClient, Web3ChainClient
from .errors import (
    ChainError,
    ChainFailureReason,
    EventDecodeError,
    PersistenceError,
    ReconciliationGapError,
    classify_chain_error,
)
from .reconciler import ChainEventReconciler, IdSource, ReconciliationResult

__all__ = [
    "ChainClient",
    "Web3ChainClient",
    "ChainError",
    "ChainFailureReason",
    "EventDecodeError",
    "PersistenceError",
    "ReconciliationGapError",
    "classify_chain_error",
    "ChainEventReconciler",
    "IdSource",
    "ReconciliationResult",
]
