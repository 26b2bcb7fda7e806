import json

import pytest

from route_resolver.config import Settings
from route_resolver.errors import ConfigurationError


def test_defaults_describe_vietnam() -> None:
    s = Settings()

    b = s.bounds()
    assert (b.min_lat, b.max_lat, b.min_lng, b.max_lng) == (8.5, 23.4, 102.1, 109.5)
    assert [w.name for w in s.catalog()][:2] == ["Thanh Hoa", "Vinh"]
    assert s.synthesis_threshold_deg == 5.0
    assert s.primary_timeout_s == 8.0


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("ROUTE_RESOLVER_MIN_LAT", "40.0")
    monkeypatch.setenv("ROUTE_RESOLVER_MAX_LAT", "45.0")
    monkeypatch.setenv("ROUTE_RESOLVER_PROVIDER", "mock")
    monkeypatch.setenv("ROUTE_RESOLVER_WAYPOINTS", json.dumps([{"name": "Lyon", "lat": 45.76, "lng": 4.83}]))

    s = Settings()

    assert s.bounds().min_lat == 40.0
    assert s.provider == "mock"
    assert [(w.name, w.lat) for w in s.catalog()] == [("Lyon", 45.76)]


def test_inverted_bounds_fail_at_startup(monkeypatch) -> None:
    monkeypatch.setenv("ROUTE_RESOLVER_MIN_LNG", "110.0")

    with pytest.raises(ConfigurationError):
        Settings().bounds()
