"""
Synthetic venues used when the Overpass API cannot be reached.

Fixtures are fixed offsets from the query point grouped into density tiers.
`RADIUS_TIERS` is ordered by threshold; a tier's fixtures are included when the
search radius is strictly greater than its threshold, so the venue count grows
4 -> 8 -> 12 as the radius crosses 5 km and 15 km.
"""

from __future__ import annotations

from dataclasses import dataclass

from wififinder.domain.models import GeoPoint, OpeningInfo, Venue, VenueCategory


@dataclass(frozen=True)
class VenueFixture:
    id: str
    name: str
    dlat: float
    dlon: float
    category: VenueCategory
    is_open: bool
    hours: str

    def at(self, origin: GeoPoint) -> Venue:
        return Venue(
            id=self.id,
            name=self.name,
            location=GeoPoint(lat=origin.lat + self.dlat, lon=origin.lon + self.dlon),
            category=self.category,
            opening=OpeningInfo(is_open=self.is_open, hours=self.hours),
        )


NEARBY: tuple[VenueFixture, ...] = (
    VenueFixture("1", "Central Coffee House", 0.002, 0.001, VenueCategory.CAFE, True, "7:00-22:00"),
    VenueFixture("2", "City Public Library", -0.001, 0.003, VenueCategory.LIBRARY, True, "9:00-18:00"),
    VenueFixture("3", "WorkSpace Co-op", 0.001, -0.002, VenueCategory.COWORKING, True, "24/7"),
    VenueFixture("4", "Bean & Brew Cafe", -0.003, -0.001, VenueCategory.CAFE, False, "6:00-20:00"),
)

DISTRICT: tuple[VenueFixture, ...] = (
    VenueFixture("5", "Downtown Library Branch", 0.015, 0.008, VenueCategory.LIBRARY, True, "9:00-20:00"),
    VenueFixture("6", "Tech Hub Coworking", -0.012, 0.015, VenueCategory.COWORKING, True, "6:00-24:00"),
    VenueFixture("7", "University Cafe", 0.008, -0.018, VenueCategory.CAFE, True, "6:30-23:00"),
    VenueFixture("8", "Innovation Center", -0.02, -0.01, VenueCategory.COWORKING, True, "24/7"),
)

CITY_WIDE: tuple[VenueFixture, ...] = (
    VenueFixture("9", "Airport Business Lounge", 0.045, 0.032, VenueCategory.COWORKING, True, "5:00-24:00"),
    VenueFixture("10", "Suburban Library", -0.038, 0.041, VenueCategory.LIBRARY, True, "10:00-18:00"),
    VenueFixture("11", "Mall Food Court Cafe", 0.025, -0.055, VenueCategory.CAFE, True, "10:00-22:00"),
    VenueFixture("12", "Business District Hub", -0.051, -0.028, VenueCategory.COWORKING, False, "7:00-19:00"),
)

# (threshold_m, fixtures); None means "always included".
RADIUS_TIERS: tuple[tuple[int | None, tuple[VenueFixture, ...]], ...] = (
    (None, NEARBY),
    (5_000, DISTRICT),
    (15_000, CITY_WIDE),
)


def fixtures_for_radius(radius_m: float) -> list[VenueFixture]:
    out: list[VenueFixture] = []
    for threshold, fixtures in RADIUS_TIERS:
        if threshold is None or radius_m > threshold:
            out.extend(fixtures)
    return out


def fallback_venues(origin: GeoPoint, radius_m: float) -> list[Venue]:
    """Deterministic stand-in for an Overpass result around `origin`."""
    return [fixture.at(origin) for fixture in fixtures_for_radius(radius_m)]
