"""
Wi-Fi observation sources.

Public Wi-Fi survey APIs (e.g. WiGLE) are heavily rate limited, so the default
source returns a small fixed set of recent sightings. Their coordinates are
placeholders: matching observations to venues is the merge engine's job, not the
source's. A real source only has to satisfy the `WifiSource` protocol.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from wififinder.core.provenance import record_source
from wififinder.core.time import iso_ago, utc_now
from wififinder.domain.models import GeoPoint, WifiObservation

logger = logging.getLogger(__name__)

SOURCE_NAME = "wifi"

PLACEHOLDER_LOCATION = GeoPoint(lat=0.0, lon=0.0)

# (ssid, signal dBm, seconds since last seen)
SYNTHETIC_NETWORKS: tuple[tuple[str, int, int], ...] = (
    ("CentralCoffee_Free", -45, 60 * 60),
    ("Library_Public_WiFi", -55, 30 * 60),
    ("WorkSpace_Guest", -40, 10 * 60),
)


class WifiSource(Protocol):
    def fetch_observations(self, origin: GeoPoint) -> list[WifiObservation]: ...


class SyntheticWifiSource:
    """Returns `SYNTHETIC_NETWORKS` with timestamps relative to `now`."""

    def __init__(self, now: datetime | None = None):
        self._now = now

    def fetch_observations(self, origin: GeoPoint) -> list[WifiObservation]:
        now = self._now or utc_now()
        return [
            WifiObservation(
                ssid=ssid,
                signal_strength_dbm=dbm,
                location=PLACEHOLDER_LOCATION,
                last_seen=iso_ago(now, seconds=age),
            )
            for ssid, dbm, age in SYNTHETIC_NETWORKS
        ]


def safe_fetch_observations(source: WifiSource, origin: GeoPoint) -> list[WifiObservation]:
    """Call `source`, substituting synthetic observations if it fails."""
    name = type(source).__name__
    try:
        observations = list(source.fetch_observations(origin))
    except Exception as exc:
        logger.warning("Wi-Fi source %s failed (%s: %s); using synthetic observations", name, type(exc).__name__, exc)
        observations = SyntheticWifiSource().fetch_observations(origin)
        record_source(SOURCE_NAME, "fallback", error=type(exc).__name__, count=len(observations))
        return observations

    mode = "fallback" if isinstance(source, SyntheticWifiSource) else "live"
    record_source(SOURCE_NAME, mode, source=name, count=len(observations))
    return observations
