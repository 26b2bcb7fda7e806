"""Per-route memo of the last successfully resolved path."""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from route_resolver.cache import keys
from route_resolver.cache.redis_client import cache_get_json, cache_set_json
from route_resolver.contracts.route_contract import CacheEntry, ResolvedPath

log = logging.getLogger(__name__)


class RoutePathCache:
    """
    One entry per route id, last write wins, no expiry.

    Entries are immutable and swapped in under a lock, so a reader sees
    either the previous entry or the new one. With ``mirror_redis`` the
    entries are also written to Redis at *redis_url* (``settings.redis_url``
    when omitted) and a local miss reads through.
    """

    def __init__(self, mirror_redis: bool = False, redis_url: Optional[str] = None):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self.mirror_redis = mirror_redis
        self.redis_url = redis_url

    def entry(self, route_id) -> Optional[CacheEntry]:
        rid = str(route_id)
        with self._lock:
            found = self._entries.get(rid)
        if found is not None or not self.mirror_redis:
            return found

        raw = cache_get_json(keys.route_path(rid), url=self.redis_url)
        if raw is None:
            return None
        try:
            found = CacheEntry.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Discarding unreadable cached path for route %s: %s", rid, exc)
            return None
        with self._lock:
            # a local put may have landed while we were reading Redis
            return self._entries.setdefault(rid, found)

    def get(self, route_id) -> Optional[ResolvedPath]:
        found = self.entry(route_id)
        return found.path if found is not None else None

    def put(self, route_id, path: ResolvedPath) -> CacheEntry:
        rid = str(route_id)
        new = CacheEntry(route_id=rid, path=path, resolved_at=datetime.now(timezone.utc))
        with self._lock:
            self._entries[rid] = new
        if self.mirror_redis:
            cache_set_json(keys.route_path(rid), new.to_dict(), url=self.redis_url)
        return new

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, route_id) -> bool:
        with self._lock:
            return str(route_id) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
