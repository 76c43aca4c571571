from fastapi import APIRouter, Depends, Query, status

from src.api.core.constants import WALLET_ADDRESS_PATTERN
from src.api.core.decorators.auth import WalletAddressDep, ensure_wallet_owns
from src.api.core.decorators.rate_limit import read_rate_limit, write_rate_limit
from src.api.core.dependencies import ProviderProfileServiceDep
from src.api.core.messages import APIResponse, MessageCode
from src.api.provider_profiles.schemas import (
    ProviderProfileLookupResponse,
    ProviderProfileModel,
    ProviderProfileRequest,
    ProviderProfileResponse,
)
from src.modules.profiles.patch import ProfilePatch

router = APIRouter(prefix="/provider-profiles", tags=["provider-profiles"])


@router.get(
    "", response_model=ProviderProfileLookupResponse, dependencies=[Depends(read_rate_limit)]
)
async def get_provider_profile(
    service: ProviderProfileServiceDep,
    provider_address: str = Query(..., pattern=WALLET_ADDRESS_PATTERN),
) -> ProviderProfileLookupResponse:
    profile = await service.get_profile(provider_address)
    return APIResponse.success(
        data=ProviderProfileModel.model_validate(profile) if profile else None
    )


@router.post(
    "",
    response_model=ProviderProfileResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(write_rate_limit)],
)
async def create_provider_profile(
    body: ProviderProfileRequest,
    wallet_address: WalletAddressDep,
    service: ProviderProfileServiceDep,
) -> ProviderProfileResponse:
    ensure_wallet_owns(wallet_address, body.provider_address)
    profile = await service.create_profile(
        body.provider_address, ProfilePatch.from_fields(body.patch_fields())
    )
    return APIResponse.success(
        message_code=MessageCode.PROFILE_CREATED,
        data=ProviderProfileModel.model_validate(profile),
    )


@router.put("", response_model=ProviderProfileResponse, dependencies=[Depends(write_rate_limit)])
async def update_provider_profile(
    body: ProviderProfileRequest,
    wallet_address: WalletAddressDep,
    service: ProviderProfileServiceDep,
) -> ProviderProfileResponse:
    """Partial update; fields left out of the body keep their stored value."""
    ensure_wallet_owns(wallet_address, body.provider_address)
    profile, created = await service.upsert_profile(
        body.provider_address, ProfilePatch.from_fields(body.patch_fields())
    )
    return APIResponse.success(
        message_code=MessageCode.PROFILE_CREATED if created else MessageCode.PROFILE_UPDATED,
        data=ProviderProfileModel.model_validate(profile),
    )
