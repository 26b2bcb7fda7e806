from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional, Sequence

from route_resolver.cache.path_cache import RoutePathCache
from route_resolver.contracts.route_contract import (
    Coordinate,
    EstimatedRoute,
    GeoBounds,
    ResolvedPath,
    RouteEntry,
    RouteRequest,
    Tier,
    Waypoint,
)
from route_resolver.core.estimate import estimate
from route_resolver.errors import OutOfBoundsError
from route_resolver.geo.bounds import is_inside
from route_resolver.geo.distance import path_distance_km
from route_resolver.geo.waypoints import check_axis, synthesize
from route_resolver.providers.chain import RouteProviderChain
from route_resolver.worker import RefreshJob

log = logging.getLogger(__name__)


class RouteEngine:
    """Consumer-facing entry point: resolve, estimate, cache, refresh."""

    def __init__(
        self,
        chain: RouteProviderChain,
        *,
        catalog: Sequence[Waypoint],
        synthesis_threshold_deg: float,
        avg_speed_kmh: float,
        rate_per_km: float,
        axis: str = "lat",
        cache: Optional[RoutePathCache] = None,
        bounds: Optional[GeoBounds] = None,
    ):
        self.chain = chain
        self.bounds = bounds if bounds is not None else chain.bounds
        self.catalog = tuple(catalog)
        self.synthesis_threshold_deg = synthesis_threshold_deg
        self.axis = check_axis(axis)
        self.avg_speed_kmh = avg_speed_kmh
        self.rate_per_km = rate_per_km
        self.cache = cache if cache is not None else RoutePathCache()

        if not self.catalog:
            log.warning("Waypoint catalog is empty; long routes go to providers without anchors")

    @classmethod
    def from_settings(cls, settings=None, provider: Optional[str] = None, cache: Optional[RoutePathCache] = None):
        if settings is None:
            from route_resolver.config import settings
        from route_resolver.providers.combined import build_chain

        bounds = settings.bounds()
        return cls(
            build_chain(provider or settings.provider, settings, bounds),
            catalog=settings.catalog(),
            synthesis_threshold_deg=settings.synthesis_threshold_deg,
            axis=settings.synthesis_axis,
            avg_speed_kmh=settings.avg_speed_kmh,
            rate_per_km=settings.rate_per_km,
            cache=cache if cache is not None else RoutePathCache(
                mirror_redis=bool(settings.redis_url), redis_url=settings.redis_url
            ),
            bounds=bounds,
        )

    # ------------------------------------------------------------------

    def validate_endpoints(self, origin: Coordinate, destination: Coordinate) -> None:
        """Reject consumer input outside the boundary before any routing."""
        if not is_inside(origin, self.bounds):
            raise OutOfBoundsError("origin", origin.lat, origin.lng)
        if not is_inside(destination, self.bounds):
            raise OutOfBoundsError("destination", destination.lat, destination.lng)

    def waypoints_for(self, origin: Coordinate, destination: Coordinate) -> List[Coordinate]:
        return synthesize(origin, destination, self.catalog, self.synthesis_threshold_deg, self.axis)

    def resolve_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        cancel: Optional[threading.Event] = None,
    ) -> ResolvedPath:
        request = RouteRequest(origin, destination)
        return self.chain.resolve(request, self.waypoints_for(origin, destination), cancel=cancel)

    def estimate_path(self, path: ResolvedPath, rate_per_km: Optional[float] = None) -> EstimatedRoute:
        rate = self.rate_per_km if rate_per_km is None else rate_per_km
        est = estimate(path_distance_km(path.vertices), self.avg_speed_kmh, rate)
        return EstimatedRoute(
            path=path,
            distance_km=est.distance_km,
            duration_hours=est.duration_hours,
            fee_estimate=est.fee_estimate,
        )

    def resolve_and_estimate(
        self,
        origin: Coordinate,
        destination: Coordinate,
        rate_per_km: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> EstimatedRoute:
        return self.estimate_path(self.resolve_route(origin, destination, cancel=cancel), rate_per_km)

    def get_cached_or_resolve(
        self,
        route_id,
        origin: Coordinate,
        destination: Coordinate,
        cancel: Optional[threading.Event] = None,
    ) -> ResolvedPath:
        """Return the cached path or resolve one; straight-line results are returned but never cached."""
        cached = self.cache.get(route_id)
        if cached is not None:
            return cached
        path = self.resolve_route(origin, destination, cancel=cancel)
        self.remember(route_id, path)
        return path

    def remember(self, route_id, path: ResolvedPath) -> bool:
        """Cache *path* unless it is a FALLBACK line, which must not replace a road path."""
        if path.source == Tier.FALLBACK:
            log.info("Not caching straight-line path for route %s", route_id)
            return False
        self.cache.put(route_id, path)
        return True

    def refresh_cache_in_background(
        self,
        entries: Iterable[RouteEntry],
        on_resolved: Optional[Callable[[str, ResolvedPath], None]] = None,
    ) -> RefreshJob:
        """Start a sequential refresh on a daemon thread and return its handle immediately."""
        job = RefreshJob(self, entries)
        if on_resolved is not None:
            job.subscribe(on_resolved)
        job.start()
        return job
