from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeout
from typing import List, Optional, Sequence

from route_resolver.contracts.route_contract import (
    Coordinate,
    GeoBounds,
    ResolvedPath,
    RouteRequest,
    Tier,
)
from route_resolver.errors import BoundaryViolation, ProviderError, ProviderUnavailable, ResolutionCancelled
from route_resolver.geo.bounds import first_outside
from route_resolver.providers.base import RouteProvider

log = logging.getLogger(__name__)


def _pin_endpoints(vertices: List[Coordinate], request: RouteRequest) -> List[Coordinate]:
    """Providers snap endpoints to the nearest road; put the exact ones back."""
    out = list(vertices)
    if out[0] != request.origin:
        out.insert(0, request.origin)
    if out[-1] != request.destination:
        out.append(request.destination)
    return out


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise ResolutionCancelled("route resolution cancelled by caller")


def _fetch_within(provider: RouteProvider, coordinates: Sequence[Coordinate]) -> List[Coordinate]:
    """
    Call ``provider.fetch_path`` with a wall-clock cap of ``provider.timeout_s``.

    The call runs on a daemon thread. Past the deadline the tier counts as
    unavailable and its late answer is dropped.
    """
    if provider.timeout_s is None:
        return provider.fetch_path(coordinates)

    future: Future = Future()

    def _run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(provider.fetch_path(coordinates))
        except BaseException as e:
            future.set_exception(e)

    threading.Thread(target=_run, name=f"route-{provider.tier.value}", daemon=True).start()
    try:
        return future.result(timeout=provider.timeout_s)
    except FutureTimeout:
        raise ProviderUnavailable(f"no answer within {provider.timeout_s:g}s") from None


class RouteProviderChain:
    """
    Ordered fall-through over routing tiers.

    Providers are tried one at a time in list order. The first one whose
    path lies entirely inside *bounds* wins. Errors, timeouts and boundary
    violations move on to the next provider; when all are exhausted the
    straight origin→destination line is returned with ``Tier.FALLBACK``.
    Nothing but ``ResolutionCancelled`` ever escapes ``resolve``.
    """

    def __init__(self, providers: List[RouteProvider], bounds: GeoBounds):
        self.providers = list(providers)
        self.bounds = bounds

    def _attempt(
        self,
        provider: RouteProvider,
        coordinates: Sequence[Coordinate],
        request: RouteRequest,
    ) -> List[Coordinate]:
        vertices = _fetch_within(provider, coordinates)
        if not vertices:
            raise ProviderError("provider returned an empty path")
        vertices = _pin_endpoints(vertices, request)

        outside = first_outside(vertices, self.bounds)
        if outside is not None:
            idx, v = outside
            raise BoundaryViolation(
                f"vertex {idx}/{len(vertices)} at ({v.lat:.5f}, {v.lng:.5f}) is outside bounds"
            )
        return vertices

    def resolve(
        self,
        request: RouteRequest,
        coordinates: Optional[Sequence[Coordinate]] = None,
        cancel: Optional[threading.Event] = None,
    ) -> ResolvedPath:
        """
        Resolve *request* through the tiers.

        *coordinates* is the waypoint-expanded list for providers that accept
        it; providers with ``uses_waypoints = False`` only get the endpoints.
        Setting *cancel* abandons the chain with ``ResolutionCancelled``.
        """
        direct = [request.origin, request.destination]
        expanded = list(coordinates) if coordinates else direct

        for provider in self.providers:
            _check_cancel(cancel)
            send = expanded if provider.uses_waypoints else direct
            log.debug("trying %s tier with %d coordinates", provider.tier.value, len(send))
            try:
                vertices = self._attempt(provider, send, request)
            except ProviderError as e:
                log.warning("%s tier fell through (%s): %s", provider.tier.value, type(e).__name__, e)
                continue
            except Exception:
                log.exception("%s tier raised unexpectedly; falling through", provider.tier.value)
                continue

            # a late answer to a cancelled request is discarded
            _check_cancel(cancel)
            log.info("route served by %s tier (%d vertices)", provider.tier.value, len(vertices))
            return ResolvedPath(tuple(vertices), provider.tier)

        _check_cancel(cancel)
        log.info("route served by fallback tier (straight line)")
        return ResolvedPath((request.origin, request.destination), Tier.FALLBACK)
