import pytest

from conftest import DANANG, HANOI, HCMC

from route_resolver.contracts.route_contract import Coordinate, GeoBounds, Waypoint
from route_resolver.errors import ConfigurationError
from route_resolver.geo.bounds import all_inside, first_outside, is_inside
from route_resolver.geo.distance import haversine_km, path_distance_km
from route_resolver.geo.waypoints import degree_span, synthesize


# ── bounds ───────────────────────────────────────────────────────────────

def test_inverted_bounds_are_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        GeoBounds(23.4, 8.5, 102.1, 109.5)
    with pytest.raises(ConfigurationError):
        GeoBounds(8.5, 23.4, 109.5, 109.5)


def test_is_inside_includes_edges(vn_bounds) -> None:
    assert is_inside(HANOI, vn_bounds)
    assert is_inside(Coordinate(8.5, 102.1), vn_bounds)
    assert is_inside(Coordinate(23.4, 109.5), vn_bounds)
    assert not is_inside(Coordinate(13.7563, 100.5018), vn_bounds)  # Bangkok
    assert not is_inside(Coordinate(23.5, 105.0), vn_bounds)


def test_all_inside_and_first_outside(vn_bounds) -> None:
    laos = Coordinate(17.9757, 102.0)
    assert all_inside([HANOI, DANANG, HCMC], vn_bounds)
    assert not all_inside([HANOI, laos, HCMC], vn_bounds)
    assert first_outside([HANOI, laos, HCMC], vn_bounds) == (1, laos)
    assert first_outside([HANOI, HCMC], vn_bounds) is None
    assert all_inside([], vn_bounds)


# ── distance ─────────────────────────────────────────────────────────────

def test_haversine_known_distance() -> None:
    # Hanoi to Ho Chi Minh City is roughly 1,140 km as the crow flies
    assert haversine_km(HANOI, HCMC) == pytest.approx(1138, abs=10)
    assert haversine_km(HANOI, HANOI) == 0.0


def test_two_vertex_path_equals_haversine_exactly() -> None:
    assert path_distance_km([HANOI, HCMC]) == haversine_km(HANOI, HCMC)
    assert path_distance_km([HANOI]) == 0.0
    assert path_distance_km([]) == 0.0


def test_path_distance_non_decreasing_as_vertices_are_appended() -> None:
    path = [Coordinate(10.0 + i * 0.5, 106.0 + (i % 3) * 0.1) for i in range(20)]
    previous = 0.0
    for n in range(1, len(path) + 1):
        d = path_distance_km(path[:n])
        assert d >= previous >= 0.0
        previous = d


# ── waypoint synthesis ───────────────────────────────────────────────────

def test_synthesize_orders_anchor_between_endpoints_south_to_north() -> None:
    origin = Coordinate(10.0, 106.0)
    dest = Coordinate(21.0, 105.8)
    wp = Waypoint("Mid", 15.0, 108.0)

    out = synthesize(origin, dest, [wp], threshold_deg=5.0)

    assert out == [origin, wp.coordinate, dest]


def test_synthesize_orders_descending_north_to_south(catalog) -> None:
    origin = Coordinate(21.0, 105.8)
    dest = Coordinate(10.0, 106.0)

    out = synthesize(origin, dest, catalog, threshold_deg=5.0)

    assert out[0] == origin and out[-1] == dest
    lats = [c.lat for c in out]
    assert lats == sorted(lats, reverse=True)
    assert len(out) == len(catalog) + 2


def test_synthesize_single_anchor_reversed() -> None:
    origin = Coordinate(21.0, 105.8)
    dest = Coordinate(10.0, 106.0)
    wp = Waypoint("Mid", 15.0, 108.0)

    assert synthesize(origin, dest, [wp], threshold_deg=5.0) == [origin, wp.coordinate, dest]


def test_short_route_skips_synthesis_regardless_of_catalog(catalog) -> None:
    origin = Coordinate(16.0, 108.2)
    dest = Coordinate(19.0, 105.8)
    assert degree_span(origin, dest) < 5.0

    assert synthesize(origin, dest, catalog, threshold_deg=5.0) == [origin, dest]


def test_threshold_is_exclusive() -> None:
    origin = Coordinate(10.0, 106.0)
    dest = Coordinate(15.0, 106.0)
    wp = Waypoint("Mid", 12.0, 106.0)

    assert synthesize(origin, dest, [wp], threshold_deg=5.0) == [origin, dest]
    assert synthesize(origin, dest, [wp], threshold_deg=4.9) == [origin, wp.coordinate, dest]


def test_empty_catalog_or_no_qualifying_waypoint_degrades_to_direct() -> None:
    origin = Coordinate(10.0, 106.0)
    dest = Coordinate(21.0, 105.8)

    assert synthesize(origin, dest, [], threshold_deg=5.0) == [origin, dest]
    # on the endpoint latitude is not strictly between
    edge = Waypoint("Edge", 21.0, 105.0)
    north = Waypoint("North", 22.5, 105.0)
    assert synthesize(origin, dest, [edge, north], threshold_deg=5.0) == [origin, dest]


def test_longitude_axis_is_supported() -> None:
    origin = Coordinate(40.0, 0.0)
    dest = Coordinate(41.0, 10.0)
    east = Waypoint("East", 40.2, 7.0)
    west = Waypoint("West", 40.9, 3.0)

    out = synthesize(origin, dest, [east, west], threshold_deg=5.0, axis="lng")

    assert out == [origin, west.coordinate, east.coordinate, dest]


def test_unknown_axis_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        synthesize(HANOI, HCMC, [], threshold_deg=5.0, axis="alt")
