"""Provider profile endpoints."""

from fastapi import status
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from tests.utils.assertions import assert_error_response, assert_success_response
from tests.utils.constants import OTHER_ADDRESS, PROVIDER_ADDRESS


def _profile_body(**overrides) -> dict:
    body = {
        "provider_address": PROVIDER_ADDRESS,
        "drone_model": "DJI Mavic 3",
        "specialization": "Roof inspections",
        "offers_ground_imaging": True,
        "ground_imaging_types": ["camera", "cell_phone"],
        "bio": "Licensed pilot",
    }
    body.update(overrides)
    return body


async def test_lookup_missing_profile(public_client: AsyncClient):
    response = await public_client.get(
        "/api/provider-profiles", params={"provider_address": PROVIDER_ADDRESS}
    )

    assert assert_success_response(response) is None


async def test_create_profile(provider_client: AsyncClient):
    response = await provider_client.post("/api/provider-profiles", json=_profile_body())

    data = assert_success_response(
        response, MessageCode.PROFILE_CREATED, status.HTTP_201_CREATED
    )
    assert data["ground_imaging_types"] == ["camera", "cell_phone"]
    assert data["offers_ground_imaging"] is True


async def test_create_twice_conflicts(provider_client: AsyncClient):
    await provider_client.post("/api/provider-profiles", json=_profile_body())

    response = await provider_client.post("/api/provider-profiles", json=_profile_body())

    assert_error_response(
        response, MessageCode.PROFILE_ALREADY_EXISTS, status.HTTP_409_CONFLICT
    )


async def test_put_keeps_fields_left_out(provider_client: AsyncClient):
    await provider_client.post("/api/provider-profiles", json=_profile_body())

    response = await provider_client.put(
        "/api/provider-profiles",
        json={"provider_address": PROVIDER_ADDRESS, "bio": "Now also thermal"},
    )

    data = assert_success_response(response, MessageCode.PROFILE_UPDATED)
    assert data["bio"] == "Now also thermal"
    assert data["drone_model"] == "DJI Mavic 3"
    assert data["ground_imaging_types"] == ["camera", "cell_phone"]


async def test_put_null_clears_field(provider_client: AsyncClient):
    await provider_client.post("/api/provider-profiles", json=_profile_body())

    response = await provider_client.put(
        "/api/provider-profiles",
        json={
            "provider_address": PROVIDER_ADDRESS,
            "drone_model": None,
            "ground_imaging_types": None,
        },
    )

    data = assert_success_response(response, MessageCode.PROFILE_UPDATED)
    assert data["drone_model"] is None
    assert data["ground_imaging_types"] == []
    assert data["specialization"] == "Roof inspections"


async def test_put_creates_missing_profile(provider_client: AsyncClient):
    response = await provider_client.put(
        "/api/provider-profiles",
        json={"provider_address": PROVIDER_ADDRESS, "drone_model": "Skydio 2"},
    )

    data = assert_success_response(response, MessageCode.PROFILE_CREATED)
    assert data["drone_model"] == "Skydio 2"
    assert data["offers_ground_imaging"] is False


async def test_imaging_types_accept_json_string(provider_client: AsyncClient):
    response = await provider_client.post(
        "/api/provider-profiles",
        json=_profile_body(ground_imaging_types='["camera"]'),
    )

    data = assert_success_response(
        response, MessageCode.PROFILE_CREATED, status.HTTP_201_CREATED
    )
    assert data["ground_imaging_types"] == ["camera"]


async def test_cannot_edit_another_profile(provider_client: AsyncClient):
    response = await provider_client.put(
        "/api/provider-profiles",
        json={"provider_address": OTHER_ADDRESS, "bio": "hijack"},
    )

    assert_error_response(
        response, MessageCode.WALLET_ADDRESS_MISMATCH, status.HTTP_403_FORBIDDEN
    )
