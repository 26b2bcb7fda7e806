from typing import List, Sequence

import pytest
import requests

from route_resolver.cache.path_cache import RoutePathCache
from route_resolver.contracts.route_contract import Coordinate, GeoBounds, Tier, Waypoint
from route_resolver.core.engine import RouteEngine
from route_resolver.errors import ProviderUnavailable
from route_resolver.providers.base import RouteProvider
from route_resolver.providers.chain import RouteProviderChain

HANOI = Coordinate(21.0285, 105.8542)
HAIPHONG = Coordinate(20.8449, 106.6881)
HCMC = Coordinate(10.8231, 106.6297)
DANANG = Coordinate(16.0544, 108.2022)


class ScriptedProvider(RouteProvider):
    """Returns a fixed vertex list (or raises) and records what it was sent."""

    def __init__(self, tier: Tier, vertices: Sequence[Coordinate] = (), error: Exception = None,
                 uses_waypoints: bool = True):
        self.tier = tier
        self.vertices = list(vertices)
        self.error = error
        self.uses_waypoints = uses_waypoints
        self.calls: List[List[Coordinate]] = []

    def fetch_path(self, coordinates):
        self.calls.append(list(coordinates))
        if self.error is not None:
            raise self.error
        if not self.vertices:
            return list(coordinates)
        return list(self.vertices)


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str = None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.text is not None:
            raise ValueError("not json")
        return self.payload


class FakeSession:
    """Stands in for ``requests.Session`` inside ``HTTPClient``."""

    def __init__(self, *responses):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture()
def vn_bounds() -> GeoBounds:
    return GeoBounds(8.5, 23.4, 102.1, 109.5)


@pytest.fixture()
def catalog() -> List[Waypoint]:
    return [
        Waypoint("Thanh Hoa", 19.8067, 105.7851),
        Waypoint("Vinh", 18.6793, 105.6811),
        Waypoint("Hue", 16.4637, 107.5909),
        Waypoint("Nha Trang", 12.2388, 109.1967),
    ]


@pytest.fixture()
def make_engine(vn_bounds, catalog):
    def _make(*providers, cache=None, rate_per_km=12.0, threshold=5.0):
        chain = RouteProviderChain(list(providers), vn_bounds)
        return RouteEngine(
            chain,
            catalog=catalog,
            synthesis_threshold_deg=threshold,
            avg_speed_kmh=60.0,
            rate_per_km=rate_per_km,
            cache=cache if cache is not None else RoutePathCache(),
        )

    return _make


@pytest.fixture()
def failing():
    def _make(tier: Tier):
        return ScriptedProvider(tier, error=ProviderUnavailable(f"{tier.value} down"))

    return _make
