from __future__ import annotations

# Orchestrator for venue discovery.
# It wires together:
# - boundary parsing (raw lat/lon/radius -> VenueQuery)
# - ingestion (Overpass venues + Wi-Fi observations, fetched concurrently)
# - enrichment (proximity Wi-Fi merge)
# - assembly (distances, ordering, optional category filters)
#
# External data failures never reach the caller: sources fall back to synthetic data
# and the response looks the same either way.

import contextvars
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from datetime import datetime
from typing import Any, Protocol

from wififinder.config.settings import Settings, get_settings
from wififinder.discovery.assemble import assemble
from wififinder.domain.errors import AssemblyFailed, InvalidCoordinates
from wififinder.domain.models import CategoryFilters, GeoPoint, Venue, VenueQuery, VenueResponse
from wififinder.core.provenance import record_source
from wififinder.enrichment.wifi_merge import merge_wifi
from wififinder.ingestion.fallback import fallback_venues
from wififinder.ingestion.overpass_client import SOURCE_NAME as VENUE_SOURCE_NAME
from wififinder.ingestion.overpass_client import OverpassVenueSource
from wififinder.ingestion.wifi_source import SyntheticWifiSource, WifiSource, safe_fetch_observations

logger = logging.getLogger(__name__)


class VenueSource(Protocol):
    def fetch_venues(self, origin: GeoPoint, radius_m: int) -> list[Venue]: ...


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_query(latitude: Any, longitude: Any, radius: Any = None, *, default_radius_m: int = 1000) -> VenueQuery:
    """Validate raw boundary values.

    Latitude/longitude that are missing, non-numeric or exactly 0 are rejected.
    A missing or non-numeric radius becomes `default_radius_m`; fractional radii
    are truncated to whole meters.
    """
    lat = _as_float(latitude)
    lon = _as_float(longitude)
    if not lat or not lon:
        raise InvalidCoordinates(latitude, longitude)

    radius_value = _as_float(radius)
    radius_m = int(radius_value) if radius_value is not None else default_radius_m
    return VenueQuery(origin=GeoPoint(lat=lat, lon=lon), radius_m=radius_m)


def _fetch_venues_safely(source: VenueSource, origin: GeoPoint, radius_m: int) -> list[Venue]:
    # Overpass handles its own failures; this covers any other pluggable source.
    try:
        return list(source.fetch_venues(origin, radius_m))
    except Exception as exc:
        logger.warning("Venue source %s failed (%s: %s); using fallback venues", type(source).__name__, type(exc).__name__, exc)
        venues = fallback_venues(origin, radius_m)
        record_source(VENUE_SOURCE_NAME, "fallback", error=type(exc).__name__, count=len(venues))
        return venues


def discover_venues(
    query: VenueQuery,
    *,
    settings: Settings | None = None,
    venue_source: VenueSource | None = None,
    wifi_source: WifiSource | None = None,
    filters: CategoryFilters | None = None,
    now: datetime | None = None,
) -> VenueResponse:
    """Run the full discovery pipeline for one request.

    Raises:
        AssemblyFailed: If merging or sorting fails unexpectedly.
    """
    settings = settings or get_settings()
    venue_source = venue_source or OverpassVenueSource(settings)
    wifi_source = wifi_source or SyntheticWifiSource(now=now)
    origin = query.origin

    # The two fetches are independent; each worker gets its own copy of the
    # current context so provenance recorded in the thread reaches the caller.
    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="wififinder-fetch")
    try:
        venues_future = pool.submit(
            contextvars.copy_context().run, _fetch_venues_safely, venue_source, origin, query.radius_m
        )
        wifi_future = pool.submit(contextvars.copy_context().run, safe_fetch_observations, wifi_source, origin)
        deadline = settings.overpass.timeout_seconds
        try:
            venues = venues_future.result(timeout=deadline)
        except FuturesTimeout:
            logger.warning("Venue fetch exceeded %.1fs deadline; using fallback venues", deadline)
            venues = fallback_venues(origin, query.radius_m)
            record_source(VENUE_SOURCE_NAME, "fallback", error="DeadlineExceeded", count=len(venues))
        observations = wifi_future.result()
    finally:
        # A fetch past its deadline keeps running in the background; do not wait for it.
        pool.shutdown(wait=False, cancel_futures=True)

    discovery = settings.discovery
    try:
        merged = merge_wifi(
            venues,
            observations,
            radius_m=discovery.wifi_match_radius_m,
            now=now,
            default_ssid=discovery.default_ssid,
            default_signal_dbm=discovery.default_signal_dbm,
        )
        result = assemble(merged, origin, filters)
        response = VenueResponse(venues=result, count=len(result))
    except Exception as exc:
        logger.exception("Venue assembly failed for lat=%.4f lon=%.4f", origin.lat, origin.lon)
        raise AssemblyFailed(f"{type(exc).__name__}: {exc}") from exc

    logger.debug(
        "Discovered %d venues (%d fetched, %d observations) radius=%dm",
        response.count,
        len(venues),
        len(observations),
        query.radius_m,
    )
    return response
