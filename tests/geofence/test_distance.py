import math

import pytest

from src.visitor_checkin.visitor_checkin.geofence.distance import haversine_distance, haversine_meters
from src.visitor_checkin.visitor_checkin.geofence.model import Coordinate


def test_one_degree_of_longitude_at_equator():
    assert haversine_meters(0.0, 0.0, 0.0, 1.0) == pytest.approx(111_195, abs=1)


def test_london_to_paris():
    london = Coordinate(latitude=51.5074, longitude=-0.1278)
    paris = Coordinate(latitude=48.8566, longitude=2.3522)
    assert haversine_distance(london, paris) == pytest.approx(343_500, abs=1_000)


def test_same_point_is_zero():
    p = Coordinate(latitude=12.9716, longitude=77.5946)
    assert haversine_distance(p, p) == 0.0


@pytest.mark.parametrize(
    "a, b",
    [
        ((12.9716, 77.5946), (12.98, 77.61)),
        ((-33.8688, 151.2093), (40.7128, -74.006)),
        ((89.9, 0.0), (-89.9, 179.9)),
    ],
)
def test_symmetric_and_non_negative(a, b):
    d1 = haversine_meters(a[0], a[1], b[0], b[1])
    d2 = haversine_meters(b[0], b[1], a[0], a[1])
    assert d1 >= 0
    assert math.isclose(d1, d2, rel_tol=1e-12)


def test_antipodal_points_give_half_circumference():
    assert haversine_meters(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * 6_371_000, rel=1e-9)
