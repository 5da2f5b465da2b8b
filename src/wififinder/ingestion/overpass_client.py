"""
Venue ingestion client (OpenStreetMap Overpass API).

One bounded query per request fetches cafe/restaurant/library/coworking/hackerspace
nodes around a point. Any failure (transport error, timeout, non-2xx status,
unexpected body) is logged and answered with the synthetic venues from
`wififinder.ingestion.fallback`, so callers always get a list back.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wififinder.config.settings import Settings
from wififinder.core.http import post_form
from wififinder.core.provenance import record_source
from wififinder.domain.errors import UpstreamUnavailable
from wififinder.domain.models import GeoPoint, OpeningInfo, Venue, category_from_tags
from wififinder.ingestion.fallback import fallback_venues

logger = logging.getLogger(__name__)

SOURCE_NAME = "venues"
UNNAMED_VENUE = "Unnamed Venue"


def build_overpass_query(origin: GeoPoint, radius_m: int, *, timeout_seconds: int = 25) -> str:
    """Build the Overpass QL union for Wi-Fi friendly venue nodes."""
    around = f"(around:{radius_m},{origin.lat},{origin.lon})"
    return (
        f"[out:json][timeout:{timeout_seconds}];\n"
        "(\n"
        f'  node["amenity"~"^(cafe|restaurant|library)$"]{around};\n'
        f'  node["amenity"="coworking_space"]{around};\n'
        f'  node["leisure"="hackerspace"]{around};\n'
        ");\n"
        "out;\n"
    )


def parse_elements(payload: Any) -> list[Venue]:
    """Map an Overpass JSON payload to venues.

    Raises:
        UpstreamUnavailable: If the payload is not an Overpass result document.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
        raise UpstreamUnavailable(SOURCE_NAME, "response has no 'elements' list")

    venues: list[Venue] = []
    seen_ids: set[str] = set()
    for element in payload["elements"]:
        if not isinstance(element, dict):
            continue
        raw_id = element.get("id")
        # Venue ids must be unique per result set.
        if not isinstance(raw_id, int) or isinstance(raw_id, bool) or str(raw_id) in seen_ids:
            continue
        lat = element.get("lat")
        lon = element.get("lon")
        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            continue
        seen_ids.add(str(raw_id))
        tags = element.get("tags") if isinstance(element.get("tags"), dict) else {}
        venues.append(
            Venue(
                id=str(raw_id),
                name=tags.get("name") or tags.get("brand") or UNNAMED_VENUE,
                location=GeoPoint(lat=float(lat), lon=float(lon)),
                category=category_from_tags(tags),
                # Overpass has no live open/closed state; hours are passed through as text.
                opening=OpeningInfo(is_open=True, hours=tags.get("opening_hours") or "Unknown"),
            )
        )
    return venues


class OverpassVenueSource:
    """Fetches venues from Overpass, falling back to synthetic venues on any failure."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _fetch_overpass(self, origin: GeoPoint, radius_m: int) -> Any:
        """Call the Overpass interpreter and return the decoded JSON body."""
        cfg = self._settings.overpass
        query = build_overpass_query(origin, radius_m, timeout_seconds=cfg.query_timeout_seconds)
        return post_form(
            cfg.base_url,
            data={"data": query},
            headers={"User-Agent": cfg.user_agent},
            timeout_seconds=cfg.timeout_seconds,
        )

    def fetch_venues(self, origin: GeoPoint, radius_m: int) -> list[Venue]:
        """Return venues within `radius_m` of `origin` (never raises for upstream problems)."""
        logger.info("Fetching venues for lat=%.4f lon=%.4f radius=%dm", origin.lat, origin.lon, radius_m)
        try:
            venues = parse_elements(self._fetch_overpass(origin, radius_m))
        except (httpx.HTTPError, ValueError, UpstreamUnavailable) as exc:
            logger.warning("Overpass unavailable (%s: %s); using fallback venues", type(exc).__name__, exc)
            venues = fallback_venues(origin, radius_m)
            record_source(SOURCE_NAME, "fallback", error=type(exc).__name__, count=len(venues))
            return venues

        record_source(SOURCE_NAME, "live", count=len(venues))
        return venues
