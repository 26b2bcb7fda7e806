from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from route_resolver.contracts.route_contract import Coordinate, Tier
from route_resolver.errors import MalformedResponse, ProviderUnavailable
from route_resolver.providers.base import RouteProvider
from route_resolver.providers.http import HTTPClient

log = logging.getLogger(__name__)


def coordinates_from_lnglat(pairs: Any) -> List[Coordinate]:
    """
    Convert GeoJSON-order ``[[lng, lat], ...]`` into Coordinates.

    Raises MalformedResponse on anything that is not a list of >= 2 numeric pairs.
    """
    if not isinstance(pairs, list) or len(pairs) < 2:
        raise MalformedResponse(f"Expected >= 2 coordinate pairs, got {pairs!r:.80}")
    out: List[Coordinate] = []
    for p in pairs:
        try:
            lng, lat = float(p[0]), float(p[1])
        except (TypeError, ValueError, IndexError) as e:
            raise MalformedResponse(f"Bad coordinate pair: {p!r}") from e
        out.append(Coordinate(lat, lng))
    return out


class OSRMRouteProvider(RouteProvider):
    """
    OSRM ``/route`` service with full GeoJSON geometry:
      {base}/route/v1/{profile}/{lng,lat;lng,lat;...}?overview=full&geometries=geojson

    Sends the waypoint-expanded coordinate list. Never retries; a failure
    hands over to the next tier.
    """

    tier = Tier.PRIMARY
    uses_waypoints = True

    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org",
        profile: str = "driving",
        timeout_s: float = 8.0,
        user_agent: str = "RouteResolver/0.1 (dispatch)",
        http: Optional[HTTPClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout_s = timeout_s
        self.http = http or HTTPClient(user_agent=user_agent, timeout_s=timeout_s)

    def build_url(self, coordinates: Sequence[Coordinate]) -> str:
        coords = ";".join(c.as_lnglat() for c in coordinates)
        return f"{self.base_url}/route/v1/{self.profile}/{coords}"

    def fetch_path(self, coordinates: Sequence[Coordinate]) -> List[Coordinate]:
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        data = self.http.get_json(
            self.build_url(coordinates),
            params={"overview": "full", "geometries": "geojson"},
            timeout_s=self.timeout_s,
        )

        if data.get("code") != "Ok":
            raise ProviderUnavailable(f"OSRM error: {data.get('code')} {data.get('message', '')}".strip())

        routes = data.get("routes") or []
        if not routes:
            raise MalformedResponse("OSRM: empty routes list")

        geometry = routes[0].get("geometry")
        if not isinstance(geometry, dict):
            raise MalformedResponse("OSRM: first route has no GeoJSON geometry")

        path = coordinates_from_lnglat(geometry.get("coordinates"))
        log.debug(
            "OSRM path: %d vertices, %.0f m reported",
            len(path),
            float(routes[0].get("distance") or 0.0),
        )
        return path
