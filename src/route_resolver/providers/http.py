from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from route_resolver.errors import MalformedResponse, ProviderUnavailable

log = logging.getLogger(__name__)


@dataclass
class HTTPClient:
    user_agent: str
    timeout_s: float = 8.0
    # routing tiers fall through instead of retrying
    tries: int = 1
    backoff_s: float = 0.3
    session: Optional[requests.Session] = None

    def __post_init__(self) -> None:
        self.s = self.session if self.session is not None else requests.Session()
        self.s.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
            }
        )

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout_s: Optional[float] = None,
    ) -> Dict[str, Any]:
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        last_err: Optional[Exception] = None
        for attempt in range(self.tries):
            try:
                r = self.s.get(url, params=params, timeout=timeout)
                r.raise_for_status()
                break
            except (Timeout, ConnectionError) as e:
                last_err = e
                log.debug("GET %s attempt %d failed: %s", url, attempt + 1, e)
                if attempt + 1 < self.tries:
                    time.sleep(self.backoff_s * (2**attempt))
            except RequestException as e:
                raise ProviderUnavailable(f"{type(e).__name__}: {e}") from e
        else:
            raise ProviderUnavailable(
                f"{type(last_err).__name__}: {last_err}" if last_err else "HTTP get_json failed"
            ) from last_err

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponse(f"Response from {url} is not JSON") from e
        if not isinstance(data, dict):
            raise MalformedResponse(f"Expected a JSON object from {url}, got {type(data).__name__}")
        return data
