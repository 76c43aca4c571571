"""Consumer area of interest endpoints."""

from fastapi import status
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from tests.utils.assertions import assert_error_response, assert_success_response
from tests.utils.constants import CONSUMER_ADDRESS, OTHER_ADDRESS


def _body(**overrides) -> dict:
    body = {
        "consumer_address": CONSUMER_ADDRESS,
        "location_lat": 40.7128,
        "location_lng": -74.0060,
        "radius": 10_000,
    }
    body.update(overrides)
    return body


async def test_saving_again_replaces_the_area(consumer_client: AsyncClient):
    first = assert_success_response(
        await consumer_client.post("/api/areas-of-interest", json=_body()),
        MessageCode.AREA_OF_INTEREST_SAVED,
    )
    second = assert_success_response(
        await consumer_client.post(
            "/api/areas-of-interest", json=_body(radius=2_500, location_lat=41.0)
        ),
        MessageCode.AREA_OF_INTEREST_SAVED,
    )

    assert second["id"] == first["id"]
    current = assert_success_response(
        await consumer_client.get(
            "/api/areas-of-interest", params={"consumer_address": CONSUMER_ADDRESS}
        )
    )
    assert (current["radius"], current["location_lat"]) == (2_500, 41.0)
    everyone = assert_success_response(await consumer_client.get("/api/areas-of-interest"))
    assert len(everyone) == 1


async def test_lookup_without_area(public_client: AsyncClient):
    response = await public_client.get(
        "/api/areas-of-interest", params={"consumer_address": CONSUMER_ADDRESS}
    )

    assert assert_success_response(response) is None


async def test_delete_area(consumer_client: AsyncClient):
    await consumer_client.post("/api/areas-of-interest", json=_body())

    deleted = await consumer_client.delete(
        "/api/areas-of-interest", params={"consumer_address": CONSUMER_ADDRESS}
    )
    again = await consumer_client.delete(
        "/api/areas-of-interest", params={"consumer_address": CONSUMER_ADDRESS}
    )

    assert assert_success_response(deleted, MessageCode.AREA_OF_INTEREST_DELETED) == {
        "deleted": True
    }
    assert assert_success_response(again, MessageCode.AREA_OF_INTEREST_DELETED) == {
        "deleted": False
    }


async def test_cannot_save_for_another_consumer(consumer_client: AsyncClient):
    response = await consumer_client.post(
        "/api/areas-of-interest", json=_body(consumer_address=OTHER_ADDRESS)
    )

    assert_error_response(
        response, MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
    )


async def test_cannot_delete_another_consumers_area(consumer_client: AsyncClient):
    response = await consumer_client.delete(
        "/api/areas-of-interest", params={"consumer_address": OTHER_ADDRESS}
    )

    assert_error_response(
        response, MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
    )
