from dataclasses import dataclass

from fastapi import status
from sqlalchemy import func, select

from src.api.core.constants import MAX_COVERAGE_AREAS
from src.api.core.decorators.auth import ensure_wallet_owns
from src.api.core.exceptions.base import MarketplaceException
from src.api.core.messages import MessageCode
from src.core.base import BaseService
from src.database.models import AreaOfInterest, CoverageArea
from src.modules.geo.matching import rank_by_distance
from src.modules.ratings.service import EMPTY_SUMMARY, RatingService, RatingSummary


@dataclass
class RatedCoverageArea:
    area: CoverageArea
    rating: RatingSummary
    distance_meters: float | None = None


class CoverageAreaService(BaseService):
    """Provider service radii, capped at three per provider."""

    async def count_areas(self, provider_address: str) -> int:
        stmt = (
            select(func.count())
            .select_from(CoverageArea)
            .where(CoverageArea.provider_address == provider_address.lower())
        )
        return (await self.db.execute(stmt)).scalar_one()

    async def create_area(
        self,
        provider_address: str,
        location_lat: float,
        location_lng: float,
        radius: float,
    ) -> CoverageArea:
        existing = await self.count_areas(provider_address)
        if existing >= MAX_COVERAGE_AREAS:
            raise MarketplaceException(
                MessageCode.COVERAGE_AREA_LIMIT_EXCEEDED,
                status.HTTP_409_CONFLICT,
                {"limit": MAX_COVERAGE_AREAS, "existing": existing},
            )

        area = CoverageArea(
            provider_address=provider_address.lower(),
            location_lat=location_lat,
            location_lng=location_lng,
            radius=radius,
        )
        self.db.add(area)
        await self.db.commit()
        await self.db.refresh(area)
        self.logger.info(
            "Coverage area created", provider_address=area.provider_address, area_id=area.id
        )
        return area

    async def _get_owned(self, area_id: int, wallet_address: str) -> CoverageArea:
        area = await self.db.get(CoverageArea, area_id)
        if area is None:
            raise MarketplaceException(
                MessageCode.COVERAGE_AREA_NOT_FOUND,
                status.HTTP_404_NOT_FOUND,
                {"id": area_id},
            )
        ensure_wallet_owns(wallet_address, area.provider_address)
        return area

    async def update_area(
        self,
        area_id: int,
        wallet_address: str,
        location_lat: float,
        location_lng: float,
        radius: float,
    ) -> CoverageArea:
        area = await self._get_owned(area_id, wallet_address)
        area.location_lat = location_lat
        area.location_lng = location_lng
        area.radius = radius
        await self.db.commit()
        await self.db.refresh(area)
        return area

    async def delete_area(self, area_id: int, wallet_address: str) -> None:
        area = await self._get_owned(area_id, wallet_address)
        await self.db.delete(area)
        await self.db.commit()

    async def list_areas(self, provider_address: str | None = None) -> list[CoverageArea]:
        stmt = select(CoverageArea).order_by(CoverageArea.id)
        if provider_address:
            stmt = stmt.where(CoverageArea.provider_address == provider_address.lower())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _with_ratings(self, areas: list[CoverageArea]) -> list[RatedCoverageArea]:
        summaries = await RatingService(self.db).summarize(
            {area.provider_address for area in areas}
        )
        return [
            RatedCoverageArea(area=area, rating=summaries.get(area.provider_address, EMPTY_SUMMARY))
            for area in areas
        ]

    async def list_areas_with_ratings(
        self, provider_address: str | None = None
    ) -> list[RatedCoverageArea]:
        return await self._with_ratings(await self.list_areas(provider_address))

    async def find_nearby(self, consumer_address: str) -> list[RatedCoverageArea]:
        """Coverage areas overlapping the consumer's area of interest, nearest first.

        A consumer without an area of interest sees every provider.
        """
        interest = await AreaOfInterestService(self.db).get_area(consumer_address)
        areas = await self.list_areas()
        if interest is None:
            return await self._with_ratings(areas)

        matches = rank_by_distance(interest, areas)
        rated = await self._with_ratings([match.area for match in matches])
        for entry, match in zip(rated, matches):
            entry.distance_meters = match.distance_meters
        return rated


class AreaOfInterestService(BaseService):
    """A consumer's single area of interest; saving again replaces it."""

    async def get_area(self, consumer_address: str) -> AreaOfInterest | None:
        stmt = select(AreaOfInterest).where(
            AreaOfInterest.consumer_address == consumer_address.lower()
        )
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def list_areas(self) -> list[AreaOfInterest]:
        result = await self.db.execute(select(AreaOfInterest).order_by(AreaOfInterest.id))
        return list(result.scalars().all())

    async def upsert_area(
        self,
        consumer_address: str,
        location_lat: float,
        location_lng: float,
        radius: float,
    ) -> AreaOfInterest:
        area = await self.get_area(consumer_address)
        if area is None:
            area = AreaOfInterest(consumer_address=consumer_address.lower())
            self.db.add(area)
        area.location_lat = location_lat
        area.location_lng = location_lng
        area.radius = radius
        await self.db.commit()
        await self.db.refresh(area)
        return area

    async def delete_area(self, consumer_address: str) -> bool:
        area = await self.get_area(consumer_address)
        if area is None:
            return False
        await self.db.delete(area)
        await self.db.commit()
        return True
