"""Provider profile API schemas."""

import json
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.api.core.constants import (
    MAX_BIO_LENGTH,
    MAX_DRONE_MODEL_LENGTH,
    MAX_SPECIALIZATION_LENGTH,
)
from src.api.core.messages import APIResponse
from src.api.core.types import WalletAddress
from src.modules.profiles.service import decode_imaging_types


class ProviderProfileModel(BaseModel):
    id: int
    provider_address: str
    drone_image_url: str | None = None
    drone_model: str | None = None
    specialization: str | None = None
    offers_ground_imaging: bool
    ground_imaging_types: list[str]
    bio: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("ground_imaging_types", mode="before")
    @classmethod
    def decode_types(cls, value):
        if value is None or isinstance(value, str):
            return decode_imaging_types(value)
        return value


class ProviderProfileRequest(BaseModel):
    """Profile fields; on PUT only the fields present in the body are applied."""

    provider_address: WalletAddress
    drone_image_url: str | None = None
    drone_model: str | None = Field(None, max_length=MAX_DRONE_MODEL_LENGTH)
    specialization: str | None = Field(None, max_length=MAX_SPECIALIZATION_LENGTH)
    offers_ground_imaging: bool | None = None
    ground_imaging_types: list[str] | None = None
    bio: str | None = Field(None, max_length=MAX_BIO_LENGTH)

    @field_validator("ground_imaging_types", mode="before")
    @classmethod
    def accept_json_string(cls, value):
        # Older clients send the list JSON-encoded
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError("ground_imaging_types must be a list of strings") from e
        return value

    def patch_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"provider_address"})


ProviderProfileResponse = APIResponse[ProviderProfileModel]
ProviderProfileLookupResponse = APIResponse[ProviderProfileModel | None]
