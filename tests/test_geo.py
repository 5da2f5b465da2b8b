import math

import pytest

from wififinder.core.geo import EARTH_RADIUS_M, format_distance, haversine_m, walk_minutes
from wififinder.domain.models import GeoPoint


@pytest.mark.parametrize(
    "a,b",
    [
        (GeoPoint(lat=40.0, lon=-73.0), GeoPoint(lat=40.002, lon=-72.999)),
        (GeoPoint(lat=25.0478, lon=121.5170), GeoPoint(lat=-33.8688, lon=151.2093)),
        (GeoPoint(lat=89.9, lon=10.0), GeoPoint(lat=-89.9, lon=-170.0)),
    ],
)
def test_haversine_is_symmetric(a, b):
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))


def test_haversine_zero_for_identical_points():
    p = GeoPoint(lat=51.5072, lon=-0.1276)
    assert haversine_m(p, p) == 0.0


def test_haversine_one_degree_of_longitude_on_equator():
    d = haversine_m(GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=1.0))
    assert d == pytest.approx(EARTH_RADIUS_M * math.pi / 180, rel=1e-9)


def test_haversine_antipodal_points_are_half_circumference():
    d = haversine_m(GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=180.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)
    assert not math.isnan(d)


def test_format_distance_switches_to_km_at_1000m():
    assert format_distance(0) == "0m"
    assert format_distance(238.4) == "238m"
    assert format_distance(1000) == "1.0km"
    assert format_distance(12_345) == "12.3km"


def test_walk_minutes_has_one_minute_floor():
    assert walk_minutes(0) == 1
    assert walk_minutes(30) == 1
    assert walk_minutes(1000) == 12
    assert walk_minutes(5000) == 60
