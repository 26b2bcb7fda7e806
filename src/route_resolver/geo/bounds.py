"""Rectangular national-boundary checks."""
from __future__ import annotations

from typing import Iterable

from route_resolver.contracts.route_contract import Coordinate, GeoBounds


def is_inside(coord: Coordinate, bounds: GeoBounds) -> bool:
    """True if *coord* lies within *bounds* (edges inclusive)."""
    return (
        bounds.min_lat <= coord.lat <= bounds.max_lat
        and bounds.min_lng <= coord.lng <= bounds.max_lng
    )


def all_inside(vertices: Iterable[Coordinate], bounds: GeoBounds) -> bool:
    """
    Logical AND of ``is_inside`` over every vertex.

    An empty sequence is vacuously inside; callers must reject empty paths
    on their own.
    """
    return all(is_inside(v, bounds) for v in vertices)


def first_outside(vertices: Iterable[Coordinate], bounds: GeoBounds):
    """Return ``(index, vertex)`` of the first out-of-bounds vertex, or None."""
    for i, v in enumerate(vertices):
        if not is_inside(v, bounds):
            return i, v
    return None
