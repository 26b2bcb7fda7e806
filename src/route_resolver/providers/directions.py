from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from route_resolver.contracts.route_contract import Coordinate, Tier
from route_resolver.errors import MalformedResponse
from route_resolver.providers.base import RouteProvider
from route_resolver.providers.http import HTTPClient
from route_resolver.providers.osrm import coordinates_from_lnglat

log = logging.getLogger(__name__)


class DirectionsRouteProvider(RouteProvider):
    """
    The dispatch backend's own directions endpoint:
      GET {base}/api/maps/directions?originLat=..&originLng=..&destLat=..&destLng=..&includeGeometry=true

    Response shape::

        {"totalDistance": "15.20 km", "distanceMeters": 15200,
         "totalDuration": "25 min", "durationSeconds": 1500,
         "geometry": [[lng, lat], ...]}

    Only origin/destination are sent; corridor anchors are not applied.
    A response without geometry cannot be drawn or bounds-checked and is
    treated as malformed.
    """

    tier = Tier.SECONDARY
    uses_waypoints = False

    PATH = "/api/maps/directions"

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout_s: float = 6.0,
        user_agent: str = "RouteResolver/0.1 (dispatch)",
        profile: Optional[str] = None,
        http: Optional[HTTPClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.profile = profile
        self.http = http or HTTPClient(user_agent=user_agent, timeout_s=timeout_s)

    def fetch_path(self, coordinates: Sequence[Coordinate]) -> List[Coordinate]:
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")
        origin, dest = coordinates[0], coordinates[-1]

        params = {
            "originLat": origin.lat,
            "originLng": origin.lng,
            "destLat": dest.lat,
            "destLng": dest.lng,
            "includeGeometry": "true",
        }
        if self.profile:
            params["profile"] = self.profile

        data = self.http.get_json(self.base_url + self.PATH, params=params, timeout_s=self.timeout_s)

        if data.get("distanceMeters") is None:
            raise MalformedResponse("directions: response has no distanceMeters")

        path = coordinates_from_lnglat(data.get("geometry"))
        log.debug("directions path: %d vertices, %s", len(path), data.get("totalDistance"))
        return path
