from dataclasses import dataclass

from sqlalchemy import func, select

from src.core.base import BaseService
from src.database.models import Rating


@dataclass
class RatingSummary:
    average_rating: float
    count: int


EMPTY_SUMMARY = RatingSummary(average_rating=0.0, count=0)


class RatingService(BaseService):
    async def create_rating(
        self,
        provider_address: str,
        consumer_address: str,
        request_id: int,
        rating: int,
        comment: str | None = None,
    ) -> Rating:
        entry = Rating(
            provider_address=provider_address.lower(),
            consumer_address=consumer_address.lower(),
            request_id=request_id,
            rating=rating,
            comment=comment or None,
        )
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def list_ratings(self, provider_address: str) -> tuple[list[Rating], RatingSummary]:
        """All ratings of a provider with their mean and count."""
        stmt = (
            select(Rating)
            .where(Rating.provider_address == provider_address.lower())
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        ratings = list((await self.db.execute(stmt)).scalars().all())
        if not ratings:
            return ratings, EMPTY_SUMMARY
        average = sum(r.rating for r in ratings) / len(ratings)
        return ratings, RatingSummary(average_rating=average, count=len(ratings))

    async def summarize(self, provider_addresses: set[str]) -> dict[str, RatingSummary]:
        """Mean and count per provider; providers without ratings are absent."""
        if not provider_addresses:
            return {}
        stmt = (
            select(
                Rating.provider_address,
                func.avg(Rating.rating),
                func.count(Rating.id),
            )
            .where(Rating.provider_address.in_([a.lower() for a in provider_addresses]))
            .group_by(Rating.provider_address)
        )
        result = await self.db.execute(stmt)
        return {
            address: RatingSummary(average_rating=float(avg), count=count)
            for address, avg, count in result.all()
        }
