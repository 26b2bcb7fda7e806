from __future__ import annotations

import math
import time
from typing import List, Optional, Sequence

from route_resolver.contracts.route_contract import Coordinate, Tier
from route_resolver.errors import ProviderUnavailable
from route_resolver.providers.base import RouteProvider


class MockRouteProvider(RouteProvider):
    """
    Deterministic fake routing so the pipeline runs end-to-end without APIs.

    Densifies the requested coordinate list into ``steps`` sub-segments per
    leg with a gentle sideways bend, so it looks like a road and not a ruler.

    Knobs for exercising the chain:
      offset_deg  shift interior vertices east by this much (out-of-bounds paths)
      fail        raise ProviderUnavailable instead of answering
      delay_s     sleep before answering (slow provider)
      timeout_s   total budget the chain grants each call
    """

    def __init__(
        self,
        tier: Tier = Tier.PRIMARY,
        steps: int = 8,
        bend_ratio: float = 0.03,
        offset_deg: float = 0.0,
        fail: bool = False,
        delay_s: float = 0.0,
        uses_waypoints: bool = True,
        timeout_s: Optional[float] = None,
    ):
        self.tier = tier
        self.steps = max(1, steps)
        self.bend_ratio = bend_ratio
        self.offset_deg = offset_deg
        self.fail = fail
        self.delay_s = delay_s
        self.uses_waypoints = uses_waypoints
        self.timeout_s = timeout_s
        self.calls: List[List[Coordinate]] = []

    def fetch_path(self, coordinates: Sequence[Coordinate]) -> List[Coordinate]:
        self.calls.append(list(coordinates))
        if self.delay_s:
            time.sleep(self.delay_s)
        if self.fail:
            raise ProviderUnavailable(f"mock {self.tier.value} configured to fail")

        out: List[Coordinate] = [coordinates[0]]
        for a, b in zip(coordinates, coordinates[1:]):
            dlat = b.lat - a.lat
            dlng = b.lng - a.lng
            for k in range(1, self.steps):
                u = k / self.steps
                # perpendicular bend, zero at both ends of the leg
                bend = self.bend_ratio * math.sin(u * math.pi)
                out.append(Coordinate(a.lat + u * dlat - bend * dlng, a.lng + u * dlng + bend * dlat))
            out.append(b)

        if self.offset_deg:
            out = [out[0]] + [Coordinate(c.lat, c.lng + self.offset_deg) for c in out[1:-1]] + [out[-1]]
        return out
