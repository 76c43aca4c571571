"""Bid mirror endpoints."""

from fastapi import status
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from src.database.models import BidStatus
from tests.utils.assertions import (
    assert_error_response,
    assert_success_response,
    assert_validation_error,
)
from tests.utils.constants import OTHER_ADDRESS, PROVIDER_ADDRESS


def _bid_body(**overrides) -> dict:
    body = {
        "bid_id": 1,
        "request_id": 1,
        "provider_address": PROVIDER_ADDRESS,
        "amount": "80000000000000000",
        "timeline_days": 5,
    }
    body.update(overrides)
    return body


async def test_bid_on_unknown_request(provider_client: AsyncClient):
    response = await provider_client.post("/api/bids", json=_bid_body(request_id=404))

    assert_error_response(response, MessageCode.REQUEST_NOT_FOUND, status.HTTP_404_NOT_FOUND)


async def test_create_and_list_bids(
    provider_client: AsyncClient, db_session, request_factory
):
    request = await request_factory.create_async(db_session)

    created = await provider_client.post(
        "/api/bids", json=_bid_body(request_id=request.request_id)
    )
    listed = await provider_client.get(
        "/api/bids", params={"request_id": request.request_id}
    )

    bid = assert_success_response(created, MessageCode.BID_SAVED, status.HTTP_201_CREATED)
    assert bid["status"] == "pending"
    assert bid["provider_address"] == PROVIDER_ADDRESS
    data = assert_success_response(listed)
    assert [b["bid_id"] for b in data["items"]] == [1]


async def test_bid_upsert_keeps_one_row(
    provider_client: AsyncClient, db_session, request_factory
):
    request = await request_factory.create_async(db_session)

    await provider_client.post("/api/bids", json=_bid_body(request_id=request.request_id))
    await provider_client.post(
        "/api/bids", json=_bid_body(request_id=request.request_id, timeline_days=9)
    )

    data = assert_success_response(
        await provider_client.get("/api/bids", params={"provider_address": PROVIDER_ADDRESS})
    )
    assert data["pagination"]["total"] == 1
    assert data["items"][0]["timeline_days"] == 9


async def test_timeline_bounds(provider_client: AsyncClient):
    response = await provider_client.post("/api/bids", json=_bid_body(timeline_days=0))

    assert_validation_error(response, fields=["timeline_days"])


async def test_other_wallet_cannot_take_over_bid(
    provider_client: AsyncClient, wallet_client_factory, db_session, request_factory
):
    request = await request_factory.create_async(db_session)
    await provider_client.post("/api/bids", json=_bid_body(request_id=request.request_id))

    async with wallet_client_factory(OTHER_ADDRESS) as other_client:
        response = await other_client.post(
            "/api/bids",
            json=_bid_body(
                request_id=request.request_id,
                provider_address=OTHER_ADDRESS,
                amount="1",
                status="accepted",
            ),
        )

    assert_error_response(
        response, MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
    )
    stored = assert_success_response(await provider_client.get("/api/bids"))["items"][0]
    assert stored["provider_address"] == PROVIDER_ADDRESS
    assert stored["amount"] == "80000000000000000"
    assert stored["status"] == "pending"


async def test_bid_replay_keeps_status_and_synthetic_marker(
    provider_client: AsyncClient, db_session, request_factory, bid_factory
):
    request = await request_factory.create_async(db_session)
    await bid_factory.create_async(
        db_session,
        bid_id=1,
        request_id=request.request_id,
        provider_address=PROVIDER_ADDRESS,
        status=BidStatus.ACCEPTED,
        id_synthetic=True,
    )

    response = await provider_client.post(
        "/api/bids", json=_bid_body(request_id=request.request_id, status="rejected")
    )

    bid = assert_success_response(response, MessageCode.BID_SAVED, status.HTTP_201_CREATED)
    assert bid["status"] == "accepted"
    assert bid["id_synthetic"] is True
