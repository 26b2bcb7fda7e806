"""Centralized settings for the route resolver."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel
from pydantic_settings import BaseSettings

from route_resolver.contracts.route_contract import GeoBounds, Waypoint


class WaypointSetting(BaseModel):
    name: str
    lat: float
    lng: float


# National Highway 1, north to south
_DEFAULT_WAYPOINTS = [
    WaypointSetting(name="Thanh Hoa", lat=19.8067, lng=105.7851),
    WaypointSetting(name="Vinh", lat=18.6793, lng=105.6811),
    WaypointSetting(name="Dong Hoi", lat=17.4833, lng=106.6000),
    WaypointSetting(name="Hue", lat=16.4637, lng=107.5909),
    WaypointSetting(name="Da Nang", lat=16.0544, lng=108.2022),
    WaypointSetting(name="Quang Ngai", lat=15.1214, lng=108.8044),
    WaypointSetting(name="Quy Nhon", lat=13.7829, lng=109.2196),
    WaypointSetting(name="Nha Trang", lat=12.2388, lng=109.1967),
    WaypointSetting(name="Phan Thiet", lat=10.9280, lng=108.1020),
]


class Settings(BaseSettings):
    model_config = {"env_prefix": "ROUTE_RESOLVER_"}

    # National boundary (approximate Vietnam box)
    min_lat: float = 8.5
    max_lat: float = 23.4
    min_lng: float = 102.1
    max_lng: float = 109.5

    # Corridor anchors; override with a JSON list in ROUTE_RESOLVER_WAYPOINTS
    waypoints: List[WaypointSetting] = list(_DEFAULT_WAYPOINTS)
    synthesis_threshold_deg: float = 5.0   # ~550 km
    synthesis_axis: str = "lat"

    # Primary tier: public OSRM
    osrm_base_url: str = "https://router.project-osrm.org"
    osrm_profile: str = "driving"
    primary_timeout_s: float = 8.0

    # Secondary tier: backend /api/maps/directions
    directions_base_url: str = "http://localhost:8080"
    secondary_timeout_s: float = 6.0

    provider: str = "osrm+directions"
    user_agent: str = "RouteResolver/0.1 (dispatch)"

    # Estimation
    avg_speed_kmh: float = 60.0
    rate_per_km: float = 12.0

    # Redis: empty string means disabled (in-process cache only)
    redis_url: str = ""

    # Background refresher
    worker_interval_s: int = 600

    def bounds(self) -> GeoBounds:
        return GeoBounds(self.min_lat, self.max_lat, self.min_lng, self.max_lng)

    def catalog(self) -> List[Waypoint]:
        return [Waypoint(w.name, w.lat, w.lng) for w in self.waypoints]


settings = Settings()
