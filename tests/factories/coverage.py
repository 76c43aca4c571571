"""Factories for coverage areas, areas of interest, profiles and ratings."""

import factory

from src.database.models import AreaOfInterest, CoverageArea, ProviderProfile, Rating
from .base import AsyncSQLAlchemyModelFactory, wallet_address


class CoverageAreaFactory(AsyncSQLAlchemyModelFactory[CoverageArea]):
    class Meta:
        model = CoverageArea

    provider_address = factory.Sequence(lambda n: wallet_address(0x3000 + n))
    location_lat = 40.7128
    location_lng = -74.0060
    radius = 5_000.0


class AreaOfInterestFactory(AsyncSQLAlchemyModelFactory[AreaOfInterest]):
    class Meta:
        model = AreaOfInterest

    consumer_address = factory.Sequence(lambda n: wallet_address(0x2000 + n))
    location_lat = 40.7128
    location_lng = -74.0060
    radius = 10_000.0


class ProviderProfileFactory(AsyncSQLAlchemyModelFactory[ProviderProfile]):
    class Meta:
        model = ProviderProfile

    provider_address = factory.Sequence(lambda n: wallet_address(0x3000 + n))
    drone_model = "DJI Mavic 3"
    specialization = "Roof inspections"
    offers_ground_imaging = False
    ground_imaging_types = None
    bio = factory.Faker("sentence")


class RatingFactory(AsyncSQLAlchemyModelFactory[Rating]):
    class Meta:
        model = Rating

    provider_address = factory.Sequence(lambda n: wallet_address(0x3000 + n))
    consumer_address = factory.Sequence(lambda n: wallet_address(0x2000 + n))
    request_id = factory.Sequence(lambda n: n + 1)
    rating = 5
    comment = None
