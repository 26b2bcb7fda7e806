from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Sequence

from route_resolver.contracts.route_contract import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometres between two WGS-84 points."""
    lat1r, lng1r, lat2r, lng2r = map(radians, [a.lat, a.lng, b.lat, b.lng])
    dlat = lat2r - lat1r
    dlng = lng2r - lng1r
    h = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlng / 2) ** 2
    # float noise can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(h), sqrt(1 - h))


def path_distance_km(vertices: Sequence[Coordinate]) -> float:
    """Sum of great-circle legs along a polyline. 0.0 for fewer than 2 vertices."""
    if len(vertices) < 2:
        return 0.0
    total = 0.0
    for i in range(1, len(vertices)):
        total += haversine_km(vertices[i - 1], vertices[i])
    return total
