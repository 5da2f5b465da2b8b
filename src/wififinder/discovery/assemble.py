"""
Result assembly: distances, ordering and category filtering.

Distances are always recomputed from the query point; whatever `distance_m` a
source supplied is overwritten. Sorting relies on Python's stable sort so venues
at equal distance keep their source order. Nothing is truncated.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from wififinder.core.geo import haversine_m
from wififinder.domain.models import CategoryFilters, GeoPoint, Venue


def with_distances(venues: Iterable[Venue], origin: GeoPoint) -> list[Venue]:
    return [v.model_copy(update={"distance_m": haversine_m(origin, v.location)}) for v in venues]


def sort_by_distance(venues: Iterable[Venue]) -> list[Venue]:
    return sorted(venues, key=lambda v: v.distance_m)


def filter_by_category(venues: Iterable[Venue], filters: CategoryFilters) -> list[Venue]:
    return [v for v in venues if filters.includes(v.category)]


def assemble(
    venues: Sequence[Venue],
    origin: GeoPoint,
    filters: CategoryFilters | None = None,
) -> list[Venue]:
    """Recompute distances, sort ascending, then apply `filters` if given."""
    ordered = sort_by_distance(with_distances(venues, origin))
    if filters is None:
        return ordered
    return filter_by_category(ordered, filters)
