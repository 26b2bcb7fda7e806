"""Anchor-point synthesis for long routes.

Routing services handed two far-apart endpoints may pick the geometrically
shortest road, which in some countries crosses a neighbour's territory.
Pinning the request through hand-picked corridor towns keeps it at home.
"""
from __future__ import annotations

from math import hypot
from typing import List, Sequence

from route_resolver.contracts.route_contract import Coordinate, Waypoint
from route_resolver.errors import ConfigurationError

AXES = ("lat", "lng")


def check_axis(axis: str) -> str:
    if axis not in AXES:
        raise ConfigurationError(f"Unknown synthesis axis: '{axis}' (supported: lat, lng)")
    return axis


def degree_span(origin: Coordinate, destination: Coordinate) -> float:
    """Euclidean length in degrees. Only a cheap trigger heuristic, not a distance."""
    return hypot(destination.lat - origin.lat, destination.lng - origin.lng)


def synthesize(
    origin: Coordinate,
    destination: Coordinate,
    catalog: Sequence[Waypoint],
    threshold_deg: float,
    axis: str = "lat",
) -> List[Coordinate]:
    """
    Build the ordered coordinate list to send to a routing provider.

    Parameters
    ----------
    origin, destination : Coordinate
        Route endpoints; always first and last in the result.
    catalog : sequence of Waypoint
        Corridor anchors to choose from.
    threshold_deg : float
        Routes whose degree span does not exceed this go out unchanged.
    axis : str
        ``"lat"`` or ``"lng"``; the corridor's primary direction.

    Returns
    -------
    list of Coordinate
        ``[origin, *anchors, destination]`` with anchors monotonic along
        *axis* from origin towards destination.
    """
    check_axis(axis)

    if degree_span(origin, destination) <= threshold_deg or not catalog:
        return [origin, destination]

    a = getattr(origin, axis)
    b = getattr(destination, axis)
    lo, hi = min(a, b), max(a, b)

    between = [wp for wp in catalog if lo < getattr(wp, axis) < hi]
    between.sort(key=lambda wp: getattr(wp, axis), reverse=a > b)

    return [origin, *(wp.coordinate for wp in between), destination]
