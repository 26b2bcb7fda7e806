# path: route-resolver/src/route_resolver/contracts/route_contract.py

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from route_resolver.errors import ConfigurationError


class Tier(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def as_lnglat(self) -> str:
        """Provider wire order: ``lng,lat``."""
        return f"{self.lng},{self.lat}"

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class GeoBounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def __post_init__(self) -> None:
        if not self.min_lat < self.max_lat:
            raise ConfigurationError(f"GeoBounds: min_lat {self.min_lat} must be < max_lat {self.max_lat}")
        if not self.min_lng < self.max_lng:
            raise ConfigurationError(f"GeoBounds: min_lng {self.min_lng} must be < max_lng {self.max_lng}")

    def to_dict(self) -> Dict[str, float]:
        return {
            "min_lat": self.min_lat,
            "max_lat": self.max_lat,
            "min_lng": self.min_lng,
            "max_lng": self.max_lng,
        }


@dataclass(frozen=True)
class Waypoint:
    name: str
    lat: float
    lng: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)


@dataclass(frozen=True)
class RouteRequest:
    origin: Coordinate
    destination: Coordinate


@dataclass(frozen=True)
class ResolvedPath:
    vertices: Tuple[Coordinate, ...]
    source: Tier

    def __post_init__(self) -> None:
        if len(self.vertices) < 2:
            raise ValueError(f"ResolvedPath needs at least 2 vertices, got {len(self.vertices)}")

    @property
    def origin(self) -> Coordinate:
        return self.vertices[0]

    @property
    def destination(self) -> Coordinate:
        return self.vertices[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.value,
            "vertices": [v.to_dict() for v in self.vertices],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ResolvedPath:
        return cls(
            vertices=tuple(Coordinate(float(v["lat"]), float(v["lng"])) for v in data["vertices"]),
            source=Tier(data["source"]),
        )


@dataclass(frozen=True)
class RouteEstimate:
    distance_km: float
    duration_hours: float
    fee_estimate: float


@dataclass(frozen=True)
class EstimatedRoute:
    path: ResolvedPath
    distance_km: float
    duration_hours: float
    fee_estimate: float


@dataclass(frozen=True)
class CacheEntry:
    route_id: str
    path: ResolvedPath
    resolved_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route_id": self.route_id,
            "path": self.path.to_dict(),
            "resolved_at": self.resolved_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CacheEntry:
        return cls(
            route_id=str(data["route_id"]),
            path=ResolvedPath.from_dict(data["path"]),
            resolved_at=datetime.fromisoformat(data["resolved_at"]),
        )


@dataclass(frozen=True)
class RouteEntry:
    route_id: str
    origin: Coordinate
    destination: Coordinate
    name: Optional[str] = None
