"""
WiFiFinder CLI entrypoint.

This CLI is intended for quick local demos and debugging without an HTTP server.
It delegates all discovery logic to `wififinder.discovery.pipeline.discover_venues`.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from wififinder.config.settings import get_settings
from wififinder.core.geo import format_distance, walk_minutes
from wififinder.core.logging import configure_logging
from wififinder.discovery.pipeline import discover_venues, parse_query
from wififinder.domain.errors import AssemblyFailed, InvalidCoordinates
from wififinder.domain.models import CategoryFilters, GeoPoint, Venue, VenueCategory
from wififinder.ingestion.fallback import fallback_venues


class _OfflineVenueSource:
    """Skip Overpass entirely and serve the synthetic venues."""

    def fetch_venues(self, origin: GeoPoint, radius_m: int) -> list[Venue]:
        return fallback_venues(origin, radius_m)


def _format_venue(index: int, venue: Venue) -> list[str]:
    status = ""
    if venue.opening is not None:
        status = f"{'open' if venue.opening.is_open else 'closed'} {venue.opening.hours}"
    lines = [
        f"{index:>2}. {venue.name} [{venue.category.value}]  "
        f"{format_distance(venue.distance_m)} ({walk_minutes(venue.distance_m)} min walk)  {status}".rstrip()
    ]
    if venue.wifi is not None:
        bars = "#" * venue.wifi.strength_bars + "." * (4 - venue.wifi.strength_bars)
        lines.append(f"    wifi: {venue.wifi.ssid} {venue.wifi.signal_strength_dbm} dBm [{bars}]")
    return lines


def _cmd_venues(args: argparse.Namespace) -> int:
    """Handle the `venues` subcommand."""
    settings = get_settings()
    try:
        query = parse_query(args.lat, args.lon, args.radius, default_radius_m=settings.discovery.default_radius_m)
    except InvalidCoordinates as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    filters = CategoryFilters.excluding(args.exclude) if args.exclude else None
    try:
        response = discover_venues(
            query,
            settings=settings,
            venue_source=_OfflineVenueSource() if args.offline else None,
            filters=filters,
        )
    except AssemblyFailed as e:
        print(f"error: failed to fetch venues ({e})", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(response.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"{response.count} venues within {format_distance(query.radius_m)}:")
    for i, venue in enumerate(response.venues, start=1):
        for line in _format_venue(i, venue):
            print(line)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the WiFiFinder CLI."""
    parser = argparse.ArgumentParser(prog="wififinder")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level.")
    sub = parser.add_subparsers(dest="command", required=True)

    ven = sub.add_parser("venues", help="List cafes, libraries and coworking spaces with Wi-Fi near a point.")
    ven.add_argument("--lat", required=True, type=float)
    ven.add_argument("--lon", required=True, type=float)
    ven.add_argument("--radius", type=float, default=None, help="Search radius in meters (default from config).")
    ven.add_argument(
        "--exclude",
        action="append",
        default=[],
        choices=[c.value for c in VenueCategory],
        help="Repeatable. Hide venues of this category.",
    )
    ven.add_argument("--offline", action="store_true", help="Use synthetic venues instead of querying Overpass.")
    ven.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    ven.set_defaults(func=_cmd_venues)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m wififinder.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
