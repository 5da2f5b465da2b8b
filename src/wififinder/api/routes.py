"""
API routes.

Endpoints:
- GET `/api/venues`: venue discovery (lat, lon, radius + optional category flags).
- GET `/api/health`: liveness probe with app name/version.

Query parameters are read as plain strings so the boundary rules (zero coordinates
rejected, radius defaulting) apply instead of framework-level 422 errors.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from wififinder.config.settings import get_settings
from wififinder.core.provenance import capture_provenance
from wififinder.discovery.pipeline import discover_venues, parse_query
from wififinder.domain.errors import AssemblyFailed, InvalidCoordinates
from wififinder.domain.models import CategoryFilters

logger = logging.getLogger(__name__)

router = APIRouter()

_FALSE_FLAGS = {"0", "false", "no", "n", "off"}


def _flag(value: str | None) -> bool:
    if value is None:
        return True
    return value.strip().lower() not in _FALSE_FLAGS


@router.get("/api/health")
def get_health() -> dict:
    settings = get_settings()
    return {"status": "ok", "name": settings.app.name, "version": settings.app.version}


@router.get("/api/venues")
def get_venues(
    lat: str | None = None,
    lon: str | None = None,
    radius: str | None = None,
    cafe: str | None = None,
    library: str | None = None,
    coworking: str | None = None,
) -> JSONResponse:
    """Discover venues around (lat, lon) and return `{venues, count}`."""
    settings = get_settings()
    try:
        query = parse_query(lat, lon, radius, default_radius_m=settings.discovery.default_radius_m)
    except InvalidCoordinates as e:
        logger.info("Rejected venue request: %s", e)
        return JSONResponse(status_code=400, content={"error": "Invalid coordinates"})

    filters = CategoryFilters(cafe=_flag(cafe), library=_flag(library), coworking=_flag(coworking))
    try:
        with capture_provenance() as prov:
            response = discover_venues(query, settings=settings, filters=filters)
    except AssemblyFailed:
        return JSONResponse(status_code=500, content={"error": "Failed to fetch venues"})

    logger.info(
        "Served %d venues for lat=%.4f lon=%.4f radius=%dm (venues=%s wifi=%s)",
        response.count,
        query.origin.lat,
        query.origin.lon,
        query.radius_m,
        prov.mode_of("venues"),
        prov.mode_of("wifi"),
    )
    return JSONResponse(content=response.model_dump(mode="json"))
