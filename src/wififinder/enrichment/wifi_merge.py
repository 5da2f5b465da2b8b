"""
Attach Wi-Fi annotations to venues by proximity.

Each venue takes the first observation (in input order) that lies strictly within
the match radius. There is deliberately no nearest-neighbour ranking among several
qualifying observations, which keeps results deterministic for a given input.
Venues without a match get the default "Free WiFi" annotation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from wififinder.core.geo import haversine_m
from wififinder.domain.models import (
    DEFAULT_SIGNAL_DBM,
    DEFAULT_SSID,
    Venue,
    WifiAnnotation,
    WifiObservation,
)

MATCH_RADIUS_M = 100.0


def first_observation_within(
    venue: Venue, observations: Sequence[WifiObservation], *, radius_m: float = MATCH_RADIUS_M
) -> WifiObservation | None:
    for obs in observations:
        if haversine_m(venue.location, obs.location) < radius_m:
            return obs
    return None


def merge_wifi(
    venues: Sequence[Venue],
    observations: Sequence[WifiObservation],
    *,
    radius_m: float = MATCH_RADIUS_M,
    now: datetime | None = None,
    default_ssid: str = DEFAULT_SSID,
    default_signal_dbm: int = DEFAULT_SIGNAL_DBM,
) -> list[Venue]:
    """Return copies of `venues` (same order) with `wifi` filled in."""
    merged: list[Venue] = []
    for venue in venues:
        match = first_observation_within(venue, observations, radius_m=radius_m)
        if match is not None:
            wifi = match.to_annotation()
        else:
            wifi = WifiAnnotation.default(now=now, ssid=default_ssid, signal_strength_dbm=default_signal_dbm)
        merged.append(venue.model_copy(update={"wifi": wifi}))
    return merged
