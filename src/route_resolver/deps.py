"""Process-wide engine singleton for the HTTP layer."""
from __future__ import annotations

import logging
import threading
from typing import Optional

from route_resolver.core.engine import RouteEngine

log = logging.getLogger(__name__)

_engine: Optional[RouteEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> RouteEngine:
    """FastAPI dependency. Builds the engine from settings on first use."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                from route_resolver.config import settings

                _engine = RouteEngine.from_settings(settings)
                log.info("Route engine ready (provider=%s)", settings.provider)
    return _engine


def set_engine(engine: Optional[RouteEngine]) -> None:
    global _engine
    with _engine_lock:
        _engine = engine
