"""Escrow contract ABI fragments used by the agent endpoints."""


def _uint(name: str, indexed: bool | None = None) -> dict:
    entry = {"internalType": "uint256", "name": name, "type": "uint256"}
    if indexed is not None:
        entry["indexed"] = indexed
    return entry


def _function(name: str, inputs: list[dict], mutability: str = "nonpayable", returns_id: bool = False) -> dict:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": [_uint("")] if returns_id else [],
        "stateMutability": mutability,
        "type": "function",
    }


ESCROW_ABI: list[dict] = [
    {
        "anonymous": False,
        "inputs": [
            _uint("requestId", indexed=True),
            {"indexed": True, "internalType": "address", "name": "consumer", "type": "address"},
            {"indexed": False, "internalType": "string", "name": "title", "type": "string"},
            _uint("budget", indexed=False),
            _uint("deadline", indexed=False),
        ],
        "name": "RequestCreated",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [
            _uint("bidId", indexed=True),
            _uint("requestId", indexed=True),
            {"indexed": True, "internalType": "address", "name": "provider", "type": "address"},
            _uint("amount", indexed=False),
            _uint("timeline", indexed=False),
        ],
        "name": "BidSubmitted",
        "type": "event",
    },
    _function(
        "createRequest",
        [
            {"internalType": "string", "name": "_title", "type": "string"},
            {"internalType": "string", "name": "_description", "type": "string"},
            _uint("_budget"),
            _uint("_deadline"),
        ],
        returns_id=True,
    ),
    _function("submitBid", [_uint("_requestId"), _uint("_amount"), _uint("_timeline")], returns_id=True),
    _function("acceptBid", [_uint("_requestId"), _uint("_bidId")], mutability="payable"),
    _function("deliverJob", [_uint("_requestId")]),
    _function("approveDelivery", [_uint("_requestId")]),
    _function(
        "disputeDelivery",
        [_uint("_requestId"), {"internalType": "string", "name": "_reason", "type": "string"}],
    ),
]
