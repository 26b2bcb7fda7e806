"""Redis key naming conventions for the route resolver cache layer."""
from __future__ import annotations

_PREFIX = "rr"


def route_path(route_id: str) -> str:
    """Key for the last resolved path of a route."""
    return f"{_PREFIX}:path:{route_id}"


def worker_last_run() -> str:
    return f"{_PREFIX}:worker:last_run"
