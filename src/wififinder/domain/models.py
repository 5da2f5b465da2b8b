"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- API/CLI inputs (`VenueQuery`, `CategoryFilters`)
- source records (`Venue`, `WifiObservation`)
- the response payload (`VenueResponse`)

All models are frozen: pipeline stages build new objects instead of mutating
what an earlier stage produced.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wififinder.core.time import isoformat_z, utc_now

DEFAULT_SSID = "Free WiFi"
DEFAULT_SIGNAL_DBM = -65


class GeoPoint(BaseModel):
    """A latitude/longitude pair in decimal degrees (WGS84)."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class VenueCategory(str, Enum):
    CAFE = "cafe"
    LIBRARY = "library"
    COWORKING = "coworking"


_AMENITY_CATEGORIES: dict[str, VenueCategory] = {
    "cafe": VenueCategory.CAFE,
    "restaurant": VenueCategory.CAFE,
    "library": VenueCategory.LIBRARY,
    "coworking_space": VenueCategory.COWORKING,
}
_LEISURE_CATEGORIES: dict[str, VenueCategory] = {
    "hackerspace": VenueCategory.COWORKING,
}


def category_from_tags(tags: Mapping[str, Any] | None) -> VenueCategory:
    """Map OSM `amenity`/`leisure` tags onto a category; anything unknown is a cafe."""
    if not tags:
        return VenueCategory.CAFE
    amenity = tags.get("amenity")
    if amenity:
        return _AMENITY_CATEGORIES.get(str(amenity), VenueCategory.CAFE)
    leisure = tags.get("leisure")
    if leisure:
        return _LEISURE_CATEGORIES.get(str(leisure), VenueCategory.CAFE)
    return VenueCategory.CAFE


class OpeningInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_open: bool
    hours: str


class WifiAnnotation(BaseModel):
    """Wi-Fi details attached to a venue."""

    model_config = ConfigDict(frozen=True)

    ssid: str
    signal_strength_dbm: int
    last_seen: str

    @classmethod
    def default(
        cls,
        *,
        now: datetime | None = None,
        ssid: str = DEFAULT_SSID,
        signal_strength_dbm: int = DEFAULT_SIGNAL_DBM,
    ) -> "WifiAnnotation":
        """Sentinel used when no observation is close enough to a venue."""
        return cls(
            ssid=ssid,
            signal_strength_dbm=signal_strength_dbm,
            last_seen=isoformat_z(now or utc_now()),
        )

    @property
    def strength_bars(self) -> int:
        """Signal strength as 0..4 bars."""
        rssi = self.signal_strength_dbm
        if not rssi:
            return 0
        if rssi > -50:
            return 4
        if rssi > -60:
            return 3
        if rssi > -70:
            return 2
        return 1


class WifiObservation(BaseModel):
    """One sighting of a network; regenerated per request, never stored."""

    model_config = ConfigDict(frozen=True)

    ssid: str
    signal_strength_dbm: int
    location: GeoPoint
    last_seen: str

    def to_annotation(self) -> WifiAnnotation:
        return WifiAnnotation(
            ssid=self.ssid,
            signal_strength_dbm=self.signal_strength_dbm,
            last_seen=self.last_seen,
        )


class Venue(BaseModel):
    """A public place candidate (cafe, library, coworking space)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    location: GeoPoint
    category: VenueCategory = VenueCategory.CAFE
    # Recomputed against the query point before being returned; upstream values are ignored.
    distance_m: float = 0.0
    opening: OpeningInfo | None = None
    wifi: WifiAnnotation | None = None


class CategoryFilters(BaseModel):
    """Per-category include flags; every category is shown unless switched off."""

    cafe: bool = True
    library: bool = True
    coworking: bool = True

    def includes(self, category: VenueCategory) -> bool:
        return bool(getattr(self, category.value))

    @classmethod
    def excluding(cls, categories: list[VenueCategory] | list[str]) -> "CategoryFilters":
        flags = {VenueCategory(c).value: False for c in categories}
        return cls(**flags)


class VenueQuery(BaseModel):
    """Validated inbound request: where to search and how far."""

    origin: GeoPoint
    radius_m: int = Field(1000)


class VenueResponse(BaseModel):
    """Outbound payload; `count` always equals `len(venues)`."""

    venues: list[Venue]
    count: int

    @model_validator(mode="before")
    @classmethod
    def _fill_count(cls, data: Any) -> Any:
        if isinstance(data, dict) and "count" not in data:
            data = {**data, "count": len(data.get("venues") or [])}
        return data

    @model_validator(mode="after")
    def _validate_count(self) -> "VenueResponse":
        if self.count != len(self.venues):
            raise ValueError("count must equal the number of venues")
        return self
