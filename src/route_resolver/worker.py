"""Background path refresher for the route resolver.

``RefreshJob`` walks a list of routes one at a time on a daemon thread,
resolving each through the provider chain and publishing road paths to
the path cache as soon as they are ready. A straight-line fallback never
replaces a cached road path. Routes are never fetched in parallel so a
bulk refresh does not trip the public routing service's rate limits.

Run the periodic refresher with:

    python -m route_resolver.worker --routes routes.json
"""
from __future__ import annotations

import argparse
import json
import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List

from route_resolver.contracts.route_contract import Coordinate, ResolvedPath, RouteEntry
from route_resolver.errors import ResolutionCancelled

log = logging.getLogger(__name__)

Subscriber = Callable[[str, ResolvedPath], None]


class RefreshJob:
    def __init__(self, engine, entries: Iterable[RouteEntry]):
        self.engine = engine
        self.entries: List[RouteEntry] = list(entries)
        self.completed: List[str] = []
        self._subscribers: List[Subscriber] = []
        self._cancel = threading.Event()
        self._thread = threading.Thread(target=self._run, name="route-refresh", daemon=True)

    def subscribe(self, callback: Subscriber) -> None:
        """Call ``callback(route_id, path)`` after each route resolves; road paths are cached first."""
        self._subscribers.append(callback)

    def start(self) -> RefreshJob:
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Stop after the current route; already cached paths stay."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def done(self) -> bool:
        return self._thread.ident is not None and not self._thread.is_alive()

    def join(self, timeout: float = None) -> bool:
        self._thread.join(timeout)
        return self.done

    def _publish(self, route_id: str, path: ResolvedPath) -> None:
        for cb in list(self._subscribers):
            try:
                cb(route_id, path)
            except Exception:
                log.exception("Refresh subscriber failed for route %s", route_id)

    def _run(self) -> None:
        log.info("Refreshing %d route path(s)", len(self.entries))
        for entry in self.entries:
            if self._cancel.is_set():
                log.info("Refresh cancelled after %d/%d route(s)", len(self.completed), len(self.entries))
                return
            try:
                path = self.engine.resolve_route(entry.origin, entry.destination, cancel=self._cancel)
            except ResolutionCancelled:
                log.info("Refresh cancelled during route %s", entry.route_id)
                return
            except Exception:
                log.exception("Refresh failed for route %s", entry.route_id)
                continue

            rid = str(entry.route_id)
            # an outage must not replace the last road path with a straight line
            if not self.engine.remember(rid, path):
                log.warning("Route %s fell back to a straight line; kept the previous cached path", rid)
            self.completed.append(rid)
            log.debug("Route %s refreshed via %s", rid, path.source.value)
            self._publish(rid, path)

        log.info("Refresh finished: %d route(s)", len(self.completed))


# ---------------------------------------------------------------------------
# Periodic refresher
# ---------------------------------------------------------------------------

def load_route_entries(path: Path) -> List[RouteEntry]:
    """
    Read route entries from JSON::

        [{"route_id": 5, "name": "Hanoi - Hue",
          "origin": {"lat": 21.03, "lng": 105.85},
          "destination": {"lat": 16.46, "lng": 107.59}}, ...]
    """
    rows = json.loads(Path(path).read_text(encoding="utf-8"))
    out: List[RouteEntry] = []
    for row in rows:
        out.append(
            RouteEntry(
                route_id=str(row["route_id"]),
                origin=Coordinate(float(row["origin"]["lat"]), float(row["origin"]["lng"])),
                destination=Coordinate(float(row["destination"]["lat"]), float(row["destination"]["lng"])),
                name=row.get("name"),
            )
        )
    return out


def run_cycle(engine, entries: List[RouteEntry]) -> RefreshJob:
    """Run one refresh over *entries* and wait for it."""
    counts = {}

    def _count(route_id: str, path: ResolvedPath) -> None:
        counts[path.source.value] = counts.get(path.source.value, 0) + 1

    job = engine.refresh_cache_in_background(entries, on_resolved=_count)
    job.join()
    log.info("Cycle done: %d route(s) by tier %s", len(job.completed), counts)

    from route_resolver.cache.keys import worker_last_run
    from route_resolver.cache.redis_client import cache_set_json

    cache_set_json(
        worker_last_run(),
        {"at": datetime.now(timezone.utc).isoformat(), "routes": len(job.completed), "tiers": counts},
        url=getattr(engine.cache, "redis_url", None),
    )
    return job


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [worker] %(levelname)s %(message)s",
    )

    ap = argparse.ArgumentParser()
    ap.add_argument("--routes", required=True, help="JSON file with route entries")
    ap.add_argument("--provider", default=None, help="e.g. osrm+directions")
    ap.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    args = ap.parse_args()

    from route_resolver.config import settings
    from route_resolver.core.engine import RouteEngine

    engine = RouteEngine.from_settings(settings, provider=args.provider)
    log.info("Worker starting (interval=%ds)", settings.worker_interval_s)

    while True:
        try:
            entries = load_route_entries(Path(args.routes))
            run_cycle(engine, entries)
        except Exception as exc:
            log.exception("Worker cycle error: %s", exc)
        if args.once:
            return
        log.info("Sleeping %ds until next cycle", settings.worker_interval_s)
        time.sleep(settings.worker_interval_s)


if __name__ == "__main__":
    main()
