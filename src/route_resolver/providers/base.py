from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from route_resolver.contracts.route_contract import Coordinate, Tier


class RouteProvider(ABC):
    """One resolution tier: turn an ordered coordinate list into a road polyline."""

    tier: Tier = Tier.PRIMARY
    # False: the chain sends only [origin, destination]
    uses_waypoints: bool = True
    # total wall-clock budget for one fetch_path call; None means unbounded
    timeout_s: Optional[float] = None

    @abstractmethod
    def fetch_path(self, coordinates: Sequence[Coordinate]) -> List[Coordinate]:
        """Return path vertices or raise a ``ProviderError``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tier={self.tier.value})"
