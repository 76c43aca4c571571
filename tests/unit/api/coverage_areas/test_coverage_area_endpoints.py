"""Provider coverage areas and nearby discovery."""

import pytest
from fastapi import status
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from tests.utils.assertions import (
    assert_error_response,
    assert_success_response,
    assert_validation_error,
)
from tests.utils.constants import CONSUMER_ADDRESS, OTHER_ADDRESS, PROVIDER_ADDRESS


def _area_body(**overrides) -> dict:
    body = {
        "provider_address": PROVIDER_ADDRESS,
        "location_lat": 40.7128,
        "location_lng": -74.0060,
        "radius": 5_000,
    }
    body.update(overrides)
    return body


async def test_create_coverage_area(provider_client: AsyncClient):
    response = await provider_client.post("/api/coverage-areas", json=_area_body())

    data = assert_success_response(
        response, MessageCode.COVERAGE_AREA_CREATED, status.HTTP_201_CREATED
    )
    assert data["provider_address"] == PROVIDER_ADDRESS
    assert data["radius"] == 5_000


async def test_fourth_area_is_rejected(provider_client: AsyncClient):
    for lat in (40.0, 41.0, 42.0):
        created = await provider_client.post(
            "/api/coverage-areas", json=_area_body(location_lat=lat)
        )
        assert created.status_code == status.HTTP_201_CREATED

    response = await provider_client.post(
        "/api/coverage-areas", json=_area_body(location_lat=43.0)
    )

    assert_error_response(
        response, MessageCode.COVERAGE_AREA_LIMIT_EXCEEDED, status.HTTP_409_CONFLICT
    )
    listed = assert_success_response(
        await provider_client.get(
            "/api/coverage-areas", params={"provider_address": PROVIDER_ADDRESS}
        )
    )
    assert sorted(a["location_lat"] for a in listed) == [40.0, 41.0, 42.0]


@pytest.mark.parametrize("radius", [0, -1, 50_001])
async def test_radius_bounds(provider_client: AsyncClient, radius):
    response = await provider_client.post(
        "/api/coverage-areas", json=_area_body(radius=radius)
    )

    assert_validation_error(response, fields=["radius"])


async def test_update_own_area(
    provider_client: AsyncClient, db_session, coverage_area_factory
):
    area = await coverage_area_factory.create_async(
        db_session, provider_address=PROVIDER_ADDRESS
    )

    response = await provider_client.put(
        "/api/coverage-areas",
        json={"id": area.id, "location_lat": 1.0, "location_lng": 2.0, "radius": 750},
    )

    data = assert_success_response(response, MessageCode.COVERAGE_AREA_UPDATED)
    assert (data["location_lat"], data["location_lng"], data["radius"]) == (1.0, 2.0, 750)


async def test_cannot_update_another_providers_area(
    wallet_client_factory, db_session, coverage_area_factory
):
    area = await coverage_area_factory.create_async(
        db_session, provider_address=PROVIDER_ADDRESS
    )

    async with wallet_client_factory(OTHER_ADDRESS) as client:
        response = await client.put(
            "/api/coverage-areas",
            json={"id": area.id, "location_lat": 1.0, "location_lng": 2.0, "radius": 750},
        )

    assert_error_response(
        response, MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
    )


async def test_update_missing_area(provider_client: AsyncClient):
    response = await provider_client.put(
        "/api/coverage-areas",
        json={"id": 999, "location_lat": 1.0, "location_lng": 2.0, "radius": 750},
    )

    assert_error_response(
        response, MessageCode.COVERAGE_AREA_NOT_FOUND, status.HTTP_404_NOT_FOUND
    )


async def test_delete_area(provider_client: AsyncClient, db_session, coverage_area_factory):
    area = await coverage_area_factory.create_async(
        db_session, provider_address=PROVIDER_ADDRESS
    )

    response = await provider_client.delete("/api/coverage-areas", params={"id": area.id})

    assert_success_response(response, MessageCode.COVERAGE_AREA_DELETED)
    listed = assert_success_response(
        await provider_client.get(
            "/api/coverage-areas", params={"provider_address": PROVIDER_ADDRESS}
        )
    )
    assert listed == []


async def test_cannot_delete_another_providers_area(
    wallet_client_factory, db_session, coverage_area_factory
):
    area = await coverage_area_factory.create_async(
        db_session, provider_address=PROVIDER_ADDRESS
    )

    async with wallet_client_factory(OTHER_ADDRESS) as client:
        response = await client.delete("/api/coverage-areas", params={"id": area.id})

    assert_error_response(
        response, MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
    )


async def test_list_includes_provider_rating(
    public_client: AsyncClient, db_session, coverage_area_factory, rating_factory
):
    await coverage_area_factory.create_async(db_session, provider_address=PROVIDER_ADDRESS)
    await coverage_area_factory.create_async(db_session, provider_address=OTHER_ADDRESS)
    for score in (5, 4):
        await rating_factory.create_async(
            db_session, provider_address=PROVIDER_ADDRESS, rating=score
        )

    listed = assert_success_response(await public_client.get("/api/coverage-areas"))

    by_provider = {a["provider_address"]: a for a in listed}
    assert by_provider[PROVIDER_ADDRESS]["average_rating"] == 4.5
    assert by_provider[PROVIDER_ADDRESS]["rating_count"] == 2
    assert by_provider[OTHER_ADDRESS]["average_rating"] == 0.0
    assert by_provider[OTHER_ADDRESS]["rating_count"] == 0


class TestNearby:
    async def test_without_area_of_interest_returns_everything(
        self, public_client: AsyncClient, db_session, coverage_area_factory
    ):
        await coverage_area_factory.create_async(db_session, location_lat=40.7128)
        await coverage_area_factory.create_async(
            db_session, location_lat=34.0522, location_lng=-118.2437
        )

        response = await public_client.get(
            "/api/coverage-areas/nearby", params={"consumer_address": CONSUMER_ADDRESS}
        )

        data = assert_success_response(response)
        assert len(data) == 2
        assert all(a["distance_meters"] is None for a in data)

    async def test_filters_and_sorts_by_distance(
        self,
        public_client: AsyncClient,
        db_session,
        coverage_area_factory,
        area_of_interest_factory,
    ):
        await area_of_interest_factory.create_async(
            db_session,
            consumer_address=CONSUMER_ADDRESS,
            location_lat=40.7128,
            location_lng=-74.0060,
            radius=10_000,
        )
        near = await coverage_area_factory.create_async(
            db_session, location_lat=40.7228, location_lng=-74.0060, radius=5_000
        )
        nearest = await coverage_area_factory.create_async(
            db_session, location_lat=40.7138, location_lng=-74.0060, radius=1_000
        )
        await coverage_area_factory.create_async(
            db_session, location_lat=34.0522, location_lng=-118.2437, radius=50_000
        )

        response = await public_client.get(
            "/api/coverage-areas/nearby", params={"consumer_address": CONSUMER_ADDRESS}
        )

        data = assert_success_response(response)
        assert [a["id"] for a in data] == [nearest.id, near.id]
        assert data[0]["distance_meters"] == pytest.approx(111.2, rel=0.01)

    async def test_no_providers(self, public_client: AsyncClient):
        response = await public_client.get(
            "/api/coverage-areas/nearby", params={"consumer_address": CONSUMER_ADDRESS}
        )

        assert assert_success_response(response) == []
