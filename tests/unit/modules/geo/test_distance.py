"""Haversine distance and circle overlap."""

import pytest

from src.modules.geo.distance import Coordinate, circles_overlap, distance_meters

NEW_YORK = Coordinate(40.7128, -74.0060)
LOS_ANGELES = Coordinate(34.0522, -118.2437)


def test_distance_to_self_is_zero():
    assert distance_meters(NEW_YORK, NEW_YORK) == 0.0


def test_distance_is_symmetric():
    assert distance_meters(NEW_YORK, LOS_ANGELES) == pytest.approx(
        distance_meters(LOS_ANGELES, NEW_YORK)
    )


def test_one_degree_of_latitude():
    assert distance_meters(Coordinate(0, 0), Coordinate(1, 0)) == pytest.approx(
        111_195, rel=1e-4
    )


def test_new_york_to_los_angeles():
    assert distance_meters(NEW_YORK, LOS_ANGELES) == pytest.approx(3_936_000, rel=0.01)


def test_antipodal_points_do_not_overflow():
    d = distance_meters(Coordinate(0, 0), Coordinate(0, 180))
    assert d == pytest.approx(20_015_087, rel=1e-4)


@pytest.mark.parametrize(
    "lat,lng", [(90.1, 0), (-90.1, 0), (0, 180.5), (0, -181)]
)
def test_coordinate_rejects_out_of_range(lat, lng):
    with pytest.raises(ValueError):
        Coordinate(lat, lng)


def test_overlapping_circles():
    a, b = Coordinate(0, 0), Coordinate(0.01, 0)
    d = distance_meters(a, b)
    assert circles_overlap(a, d, b, 1.0)


def test_tangent_circles_do_not_overlap():
    a, b = Coordinate(0, 0), Coordinate(1, 0)
    d = distance_meters(a, b)
    assert not circles_overlap(a, d / 2, b, d / 2)


def test_distant_circles_do_not_overlap():
    assert not circles_overlap(NEW_YORK, 50_000, LOS_ANGELES, 50_000)


def test_overlap_is_symmetric():
    a, b = Coordinate(10, 10), Coordinate(10.05, 10.05)
    assert circles_overlap(a, 4_000, b, 4_000) == circles_overlap(b, 4_000, a, 4_000)
