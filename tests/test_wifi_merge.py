from datetime import datetime, timezone

from wififinder.core.geo import haversine_m
from wififinder.domain.models import GeoPoint, Venue, WifiAnnotation, WifiObservation
from wififinder.enrichment.wifi_merge import merge_wifi
from wififinder.ingestion.wifi_source import SyntheticWifiSource


NOW = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


def _venue(venue_id, lat, lon):
    return Venue(id=venue_id, name=f"Venue {venue_id}", location=GeoPoint(lat=lat, lon=lon))


def _obs(ssid, lat, lon, dbm=-50):
    return WifiObservation(
        ssid=ssid,
        signal_strength_dbm=dbm,
        location=GeoPoint(lat=lat, lon=lon),
        last_seen="2026-01-05T11:00:00.000Z",
    )


def test_venue_takes_observation_within_100m():
    venues = [_venue("a", 40.0, -73.0)]
    # ~56 m north of the venue.
    observations = [_obs("Near", 40.0005, -73.0, dbm=-48)]

    merged = merge_wifi(venues, observations, now=NOW)

    assert merged[0].wifi == WifiAnnotation(ssid="Near", signal_strength_dbm=-48, last_seen="2026-01-05T11:00:00.000Z")


def test_venue_without_nearby_observation_gets_default_sentinel():
    venues = [_venue("a", 40.0, -73.0)]
    # ~167 m away.
    observations = [_obs("Far", 40.0015, -73.0)]

    merged = merge_wifi(venues, observations, now=NOW)

    assert merged[0].wifi.ssid == "Free WiFi"
    assert merged[0].wifi.signal_strength_dbm == -65
    assert merged[0].wifi.last_seen == "2026-01-05T12:00:00.000Z"


def test_first_qualifying_observation_wins_over_a_closer_one():
    venues = [_venue("a", 40.0, -73.0)]
    observations = [
        _obs("Far", 40.0015, -73.0),
        _obs("FirstWithin", 40.0008, -73.0),  # ~89 m
        _obs("Closer", 40.0001, -73.0),  # ~11 m
    ]

    merged = merge_wifi(venues, observations, now=NOW)

    assert merged[0].wifi.ssid == "FirstWithin"


def test_merge_preserves_order_length_and_inputs():
    venues = [_venue("a", 40.0, -73.0), _venue("b", 41.0, -74.0), _venue("c", 40.0, -73.0)]
    observations = [_obs("Here", 40.0, -73.0)]

    merged = merge_wifi(venues, observations, now=NOW)

    assert [v.id for v in merged] == ["a", "b", "c"]
    assert [v.wifi.ssid for v in merged] == ["Here", "Free WiFi", "Here"]
    assert all(v.wifi is None for v in venues)


def test_merge_with_no_observations_defaults_every_venue():
    venues = [_venue("a", 40.0, -73.0), _venue("b", 41.0, -74.0)]
    merged = merge_wifi(venues, [], now=NOW)
    assert {v.wifi.ssid for v in merged} == {"Free WiFi"}


def test_synthetic_observations_have_placeholder_locations_and_recent_timestamps():
    observations = SyntheticWifiSource(now=NOW).fetch_observations(GeoPoint(lat=40.0, lon=-73.0))

    assert [o.ssid for o in observations] == ["CentralCoffee_Free", "Library_Public_WiFi", "WorkSpace_Guest"]
    assert [o.signal_strength_dbm for o in observations] == [-45, -55, -40]
    assert [o.last_seen for o in observations] == [
        "2026-01-05T11:00:00.000Z",
        "2026-01-05T11:30:00.000Z",
        "2026-01-05T11:50:00.000Z",
    ]
    assert all(o.location == GeoPoint(lat=0.0, lon=0.0) for o in observations)


def test_signal_strength_bars():
    def bars(dbm):
        return WifiAnnotation(ssid="x", signal_strength_dbm=dbm, last_seen="").strength_bars

    assert [bars(-40), bars(-55), bars(-65), bars(-80), bars(0)] == [4, 3, 2, 1, 0]


def test_observation_exactly_at_match_radius_does_not_qualify():
    venue = _venue("a", 40.0, -73.0)
    obs = _obs("Edge", 40.0009, -73.0)
    edge = haversine_m(venue.location, obs.location)

    at_edge = merge_wifi([venue], [obs], radius_m=edge, now=NOW)
    just_inside = merge_wifi([venue], [obs], radius_m=edge + 0.01, now=NOW)

    assert at_edge[0].wifi.ssid == "Free WiFi"
    assert just_inside[0].wifi.ssid == "Edge"


def test_default_match_radius_is_strictly_below_100m():
    venue = _venue("a", 40.0, -73.0)
    inside = _obs("Inside", 40.0 + 99.9 / 111_194.93, -73.0)
    outside = _obs("Outside", 40.0 + 100.1 / 111_194.93, -73.0)

    assert merge_wifi([venue], [inside], now=NOW)[0].wifi.ssid == "Inside"
    assert merge_wifi([venue], [outside], now=NOW)[0].wifi.ssid == "Free WiFi"
