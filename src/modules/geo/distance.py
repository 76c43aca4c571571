"""Great-circle distance and circle overlap between coordinates."""

import math
from dataclasses import dataclass

from src.api.core.constants import EARTH_RADIUS_METERS


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude {self.lat} out of range [-90, 90]")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"Longitude {self.lng} out of range [-180, 180]")


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Haversine great-circle distance between two points in meters."""
    lat1_r, lat2_r = math.radians(a.lat), math.radians(b.lat)
    dlat, dlng = math.radians(b.lat - a.lat), math.radians(b.lng - a.lng)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push h a hair past 1 for antipodal points
    h = min(1.0, h)
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def circles_overlap(
    center1: Coordinate, radius1: float, center2: Coordinate, radius2: float
) -> bool:
    """True iff the two circles overlap. Tangent circles do not overlap."""
    return distance_meters(center1, center2) < radius1 + radius2
