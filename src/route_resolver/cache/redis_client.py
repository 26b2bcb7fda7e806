"""Optional Redis mirror for resolved paths.

Redis is a shared copy, never the source of truth: when it is unset or
unreachable every helper quietly degrades to a no-op and the in-process
cache carries on alone.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

_clients: Dict[str, Any] = {}
_clients_lock = threading.Lock()


def get_redis(url: Optional[str] = None):
    """Return a connected ``redis.Redis`` for *url*, or ``None``.

    *url* defaults to ``settings.redis_url``. The connection attempt is made
    once per URL; a failed attempt is remembered as ``None``.
    """
    if url is None:
        from route_resolver.config import settings

        url = settings.redis_url
    if not url:
        return None

    with _clients_lock:
        if url in _clients:
            return _clients[url]
        client = None
        try:
            import redis

            client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=3)
            client.ping()
            log.info("Mirroring route paths to Redis at %s", url)
        except Exception as exc:
            log.warning("Redis unavailable at %s (%s); paths stay in this process only", url, exc)
            client = None
        _clients[url] = client
        return client


def redis_healthy(url: Optional[str] = None) -> bool:
    r = get_redis(url)
    if r is None:
        return False
    try:
        return bool(r.ping())
    except Exception as exc:
        log.debug("Redis ping failed: %s", exc)
        return False


def cache_get_json(key: str, url: Optional[str] = None) -> Optional[Any]:
    r = get_redis(url)
    if r is None:
        return None
    try:
        raw = r.get(key)
        return None if raw is None else json.loads(raw)
    except Exception as exc:
        log.debug("Redis read of %s failed: %s", key, exc)
        return None


def cache_set_json(key: str, value: Any, ttl: Optional[int] = None, url: Optional[str] = None) -> None:
    """Store *value* as JSON. ``ttl=None`` keeps the key until overwritten."""
    r = get_redis(url)
    if r is None:
        return
    try:
        r.set(key, json.dumps(value), ex=ttl)
    except Exception as exc:
        log.debug("Redis write of %s failed: %s", key, exc)
