from __future__ import annotations

from math import floor

from route_resolver.contracts.route_contract import RouteEstimate


def estimate(distance_km: float, avg_speed_kmh: float, rate_per_km: float) -> RouteEstimate:
    """
    Travel time and fee for a resolved distance.

    Speed and rate are always supplied by the caller so the same function
    serves different fleets and price lists.
    """
    if distance_km < 0:
        raise ValueError(f"distance_km must be >= 0, got {distance_km}")
    if avg_speed_kmh <= 0:
        raise ValueError(f"avg_speed_kmh must be > 0, got {avg_speed_kmh}")
    if rate_per_km < 0:
        raise ValueError(f"rate_per_km must be >= 0, got {rate_per_km}")

    return RouteEstimate(
        distance_km=distance_km,
        duration_hours=distance_km / avg_speed_kmh,
        # half-up: 2.5 -> 3
        fee_estimate=float(floor(distance_km * rate_per_km + 0.5)),
    )


def format_distance(meters: float) -> str:
    m = int(meters)
    if m < 1000:
        return f"{m} m"
    return f"{m / 1000.0:.2f} km"


def format_duration(seconds: float) -> str:
    s = int(seconds)
    if s < 60:
        return f"{s} sec"
    if s < 3600:
        return f"{s // 60} min"
    hours, minutes = s // 3600, (s % 3600) // 60
    if minutes == 0:
        return f"{hours} hr"
    return f"{hours} hr {minutes} min"
