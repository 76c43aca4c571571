"""Read and write rate limits enforced on the marketplace routes."""

import pytest
from fastapi import status
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from src.utils.settings.rate_limit import RateLimitSettings
from tests.utils.assertions import assert_error_response
from tests.utils.constants import CONSUMER_ADDRESS, OTHER_ADDRESS


@pytest.fixture
def rate_limit_settings() -> RateLimitSettings:
    return RateLimitSettings(
        RATE_LIMIT_ENABLED=True,
        READ_RATE_LIMIT=2,
        WRITE_RATE_LIMIT=1,
        RATE_LIMIT_WINDOW_SECONDS=60,
    )


def _user_body(wallet_address: str = CONSUMER_ADDRESS) -> dict:
    return {"wallet_address": wallet_address, "user_type": "consumer"}


async def test_read_limit_exceeded(consumer_client: AsyncClient):
    for _ in range(2):
        allowed = await consumer_client.get("/api/requests")
        assert allowed.status_code == status.HTTP_200_OK

    response = await consumer_client.get("/api/requests")

    body = assert_error_response(
        response, MessageCode.RATE_LIMIT_EXCEEDED, status.HTTP_429_TOO_MANY_REQUESTS
    )
    assert body["details"]["limit"] == 2
    assert body["details"]["client_type"] == "wallet"
    assert response.headers["X-RateLimit-Limit"] == "2"
    assert response.headers["X-RateLimit-Remaining"] == "0"
    assert 0 < int(response.headers["Retry-After"]) <= 60
    assert response.headers["X-RateLimit-Reset"] == response.headers["Retry-After"]


async def test_write_limit_is_separate_from_reads(consumer_client: AsyncClient):
    first = await consumer_client.post("/api/users", json=_user_body())
    assert first.status_code == status.HTTP_200_OK

    read = await consumer_client.get("/api/requests")
    assert read.status_code == status.HTTP_200_OK

    second = await consumer_client.post("/api/users", json=_user_body())
    assert second.status_code == status.HTTP_429_TOO_MANY_REQUESTS


async def test_wallets_have_their_own_budget(wallet_client_factory):
    async with wallet_client_factory(CONSUMER_ADDRESS) as consumer:
        await consumer.post("/api/users", json=_user_body())
        blocked = await consumer.post("/api/users", json=_user_body())

    async with wallet_client_factory(OTHER_ADDRESS) as other:
        allowed = await other.post("/api/users", json=_user_body(OTHER_ADDRESS))

    assert blocked.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert allowed.status_code == status.HTTP_200_OK


async def test_disabled_limits(app, consumer_client: AsyncClient):
    app.state.rate_limit_settings = RateLimitSettings(RATE_LIMIT_ENABLED=False)

    for _ in range(5):
        response = await consumer_client.get("/api/requests")
        assert response.status_code == status.HTTP_200_OK
