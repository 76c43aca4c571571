"""Provider discovery: match coverage areas against a consumer's area of interest."""

from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar

from .distance import Coordinate, circles_overlap, distance_meters


class CircleArea(Protocol):
    location_lat: float
    location_lng: float
    radius: float


A = TypeVar("A", bound=CircleArea)


@dataclass(frozen=True)
class AreaMatch:
    area: CircleArea
    distance_meters: float


def center_of(area: CircleArea) -> Coordinate:
    return Coordinate(area.location_lat, area.location_lng)


def area_overlaps(interest: CircleArea, area: CircleArea) -> bool:
    return circles_overlap(center_of(interest), interest.radius, center_of(area), area.radius)


def filter_overlapping(interest: CircleArea | None, areas: Sequence[A]) -> list[A]:
    """Coverage areas relevant to a consumer.

    With no area of interest every area passes; otherwise each area is tested
    independently against the single consumer circle.
    """
    if interest is None:
        return list(areas)
    return [area for area in areas if area_overlaps(interest, area)]


def rank_by_distance(interest: CircleArea, areas: Sequence[A]) -> list[AreaMatch]:
    """Overlapping areas with their center distance, nearest first."""
    origin = center_of(interest)
    matches = [
        AreaMatch(area=area, distance_meters=distance_meters(origin, center_of(area)))
        for area in filter_overlapping(interest, areas)
    ]
    matches.sort(key=lambda m: m.distance_meters)
    return matches
