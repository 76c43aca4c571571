import json

from fastapi import status
from sqlalchemy import select

from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.core.base import BaseService
from src.database.models import ProviderProfile

from .patch import ProfilePatch


def encode_imaging_types(types: list[str] | None) -> str | None:
    return json.dumps(types) if types else None


def decode_imaging_types(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return [str(t) for t in decoded] if isinstance(decoded, list) else []


class ProviderProfileService(BaseService):
    async def get_profile(self, provider_address: str) -> ProviderProfile | None:
        stmt = select(ProviderProfile).where(
            ProviderProfile.provider_address == provider_address.lower()
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    def _apply(self, profile: ProviderProfile, patch: ProfilePatch) -> None:
        for name, value in patch.updates().items():
            if name == "ground_imaging_types":
                value = encode_imaging_types(value)
            elif name == "offers_ground_imaging":
                value = bool(value)
            setattr(profile, name, value)

    async def create_profile(self, provider_address: str, patch: ProfilePatch) -> ProviderProfile:
        if await self.get_profile(provider_address) is not None:
            raise MarketplaceException(
                MessageCode.PROFILE_ALREADY_EXISTS,
                status.HTTP_409_CONFLICT,
                {"provider_address": provider_address.lower()},
            )
        profile = ProviderProfile(
            provider_address=provider_address.lower(), offers_ground_imaging=False
        )
        self._apply(profile, patch)
        self.db.add(profile)
        await self.db.commit()
        await self.db.refresh(profile)
        return profile

    async def upsert_profile(
        self, provider_address: str, patch: ProfilePatch
    ) -> tuple[ProviderProfile, bool]:
        """Apply a partial update, creating the profile if missing.

        Returns the profile and whether it was created.
        """
        profile = await self.get_profile(provider_address)
        created = profile is None
        if created:
            profile = ProviderProfile(
                provider_address=provider_address.lower(), offers_ground_imaging=False
            )
            self.db.add(profile)
        self._apply(profile, patch)
        await self.db.commit()
        await self.db.refresh(profile)
        return profile, created
