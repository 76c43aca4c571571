"""Drive the agent endpoints from the command line.

    marketplace-agent create-request --wallet-address 0x... --title "Roof survey" \
        --description "..." --lat 40.7128 --lng -74.0060 --budget 0.1 \
        --deadline 2030-12-31T23:59:59Z
    marketplace-agent submit-bid --request-id 1 --amount 0.08 --timeline 7
    marketplace-agent accept-bid --request-id 1 --bid-id 1 --amount 0.08
    marketplace-agent deliver-job --request-id 1
    marketplace-agent approve-delivery --request-id 1

Reads AGENT_API_KEY and API_BASE (default http://localhost:8010) from the
environment.
"""

import argparse
import json
import os
import sys

import httpx

DEFAULT_API_BASE = "http://localhost:8010"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marketplace-agent")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create-request")
    create.add_argument("--wallet-address")
    create.add_argument("--title", required=True)
    create.add_argument("--description", required=True)
    create.add_argument("--lat", type=float, required=True)
    create.add_argument("--lng", type=float, required=True)
    create.add_argument("--budget", required=True, help="ether, e.g. 0.1")
    create.add_argument("--deadline", required=True, help="ISO 8601 timestamp")

    bid = sub.add_parser("submit-bid")
    bid.add_argument("--request-id", type=int, required=True)
    bid.add_argument("--provider-address")
    bid.add_argument("--amount", required=True, help="ether")
    bid.add_argument("--timeline", type=int, required=True, help="days")

    accept = sub.add_parser("accept-bid")
    accept.add_argument("--request-id", type=int, required=True)
    accept.add_argument("--bid-id", type=int, required=True)
    accept.add_argument("--amount", required=True, help="ether")

    for name in ("deliver-job", "approve-delivery"):
        action = sub.add_parser(name)
        action.add_argument("--request-id", type=int, required=True)

    dispute = sub.add_parser("dispute-delivery")
    dispute.add_argument("--request-id", type=int, required=True)
    dispute.add_argument("--reason", required=True)

    return parser


def build_payload(args: argparse.Namespace) -> dict:
    if args.command == "create-request":
        payload = {
            "title": args.title,
            "description": args.description,
            "location_lat": args.lat,
            "location_lng": args.lng,
            "budget": args.budget,
            "deadline": args.deadline,
        }
        if args.wallet_address:
            payload["wallet_address"] = args.wallet_address
        return payload
    if args.command == "submit-bid":
        payload = {
            "request_id": args.request_id,
            "amount": args.amount,
            "timeline": args.timeline,
        }
        if args.provider_address:
            payload["provider_address"] = args.provider_address
        return payload
    if args.command == "accept-bid":
        return {"request_id": args.request_id, "bid_id": args.bid_id, "amount": args.amount}
    if args.command == "dispute-delivery":
        return {"request_id": args.request_id, "reason": args.reason}
    return {"request_id": args.request_id}


def call_agent_endpoint(
    client: httpx.Client, api_base: str, api_key: str, endpoint: str, payload: dict
) -> httpx.Response:
    return client.post(
        f"{api_base.rstrip('/')}/api/agents/{endpoint}",
        json=payload,
        headers={"X-API-Key": api_key},
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    api_key = os.getenv("AGENT_API_KEY")
    if not api_key:
        print("Error: AGENT_API_KEY environment variable is required", file=sys.stderr)
        return 1
    api_base = os.getenv("API_BASE", DEFAULT_API_BASE)

    # Receipts can take the full confirmation timeout
    with httpx.Client(timeout=60.0) as client:
        try:
            response = call_agent_endpoint(
                client, api_base, api_key, args.command, build_payload(args)
            )
        except httpx.HTTPError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        body = response.json()
    except json.JSONDecodeError:
        body = {"raw": response.text}

    if response.is_error:
        print(f"Error ({response.status_code}): {json.dumps(body, indent=2)}", file=sys.stderr)
        return 1

    if response.status_code == 202:
        print("Warning: confirmed on-chain but not recorded. Do not resubmit.", file=sys.stderr)
    print(json.dumps(body, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
