"""Great-circle distance between coordinates."""

from __future__ import annotations

from math import asin, cos, radians, sin, sqrt

from models.records import Coordinate

EARTH_RADIUS_METERS = 6_371_008.8


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in meters on a spherical Earth."""
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    dlat = lat2 - lat1
    dlon = radians(b.longitude - a.longitude)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push h fractionally above 1 for antipodal points.
    return 2 * EARTH_RADIUS_METERS * asin(sqrt(min(h, 1.0)))
