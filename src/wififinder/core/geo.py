from __future__ import annotations
from math import asin, cos, radians, sin, sqrt
from typing import Protocol

"""
Geospatial helpers.

We keep a tiny geometry layer here so ingestion and assembly code can do distance
calculations without pulling in heavier GIS dependencies.
"""

EARTH_RADIUS_M = 6_371_000
WALKING_SPEED_M_PER_HOUR = 5_000


class HasLatLon(Protocol):
    lat: float
    lon: float


def haversine_m(a: HasLatLon, b: HasLatLon) -> float:
    """Compute great-circle distance in meters between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h slightly past 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * asin(sqrt(h))


def format_distance(meters: float) -> str:
    """Render a distance the way venue listings show it (`350m`, `1.2km`)."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"


def walk_minutes(meters: float) -> int:
    """Walking time at 5 km/h, rounded, never below one minute."""
    minutes = round(meters / WALKING_SPEED_M_PER_HOUR * 60)
    return max(1, int(minutes))
