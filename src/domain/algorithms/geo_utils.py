from __future__ import annotations

import math
from typing import Iterable

from src.domain.models import GeoPoint, Stop

EARTH_RADIUS_M = 6371000.0


def haversine_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters."""

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)

    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)

    h = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    # Rounding can push h a hair outside [0, 1] for near-antipodal points.
    h = min(1.0, max(0.0, h))
    return 2.0 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def _check_radius(radius_m: float) -> float:
    radius = float(radius_m)
    if not math.isfinite(radius) or radius < 0.0:
        raise ValueError(f"Invalid radius: {radius_m}")
    return radius


def nearby_stops(
    center: GeoPoint, radius_m: float, stops: Iterable[Stop]
) -> tuple[Stop, ...]:
    """Stops within `radius_m` of `center` (inclusive).

    Linear scan; result order is not part of the contract. A grid or R-tree
    index would be needed for catalogs far larger than a city fixture.
    """

    radius = _check_radius(radius_m)
    return tuple(
        stop
        for stop in stops
        if haversine_distance_m(center, stop.location) <= radius
    )


def nearest_stops(
    center: GeoPoint,
    stops: Iterable[Stop],
    *,
    limit: int | None = None,
    radius_m: float | None = None,
) -> list[tuple[float, Stop]]:
    """(distance_m, stop) pairs sorted by distance, closest first.

    Ties keep catalog order. `limit=None` returns every stop in range.
    """

    radius = _check_radius(radius_m) if radius_m is not None else math.inf

    scored: list[tuple[float, Stop]] = []
    for stop in stops:
        d = haversine_distance_m(center, stop.location)
        if d <= radius:
            scored.append((d, stop))

    scored.sort(key=lambda x: x[0])
    if limit is None:
        return scored
    return scored[: max(0, int(limit))]
