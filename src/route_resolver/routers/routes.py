"""Route path resolution, estimation and cache endpoints."""
from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from route_resolver.contracts.route_contract import Coordinate, ResolvedPath, RouteEntry
from route_resolver.core.engine import RouteEngine
from route_resolver.core.estimate import format_distance, format_duration
from route_resolver.deps import get_engine
from route_resolver.errors import OutOfBoundsError
from route_resolver.geo.distance import path_distance_km

router = APIRouter(prefix="/routes", tags=["routes"])


class CoordinateIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)


class ResolveRequest(BaseModel):
    origin: CoordinateIn
    destination: CoordinateIn


class EstimateRequest(ResolveRequest):
    rate_per_km: Optional[float] = Field(default=None, ge=0)


class RouteEntryIn(ResolveRequest):
    route_id: Union[int, str]
    name: Optional[str] = None


class RefreshRequest(BaseModel):
    routes: List[RouteEntryIn] = Field(..., min_length=1)


class CoordinateOut(BaseModel):
    lat: float
    lng: float


class PathOut(BaseModel):
    source: str
    vertices: List[CoordinateOut]
    distance_km: float


class EstimateOut(PathOut):
    duration_hours: float
    fee_estimate: float
    distance_label: str
    duration_label: str


class CachedPathOut(PathOut):
    route_id: str
    cached: bool
    resolved_at: Optional[str] = None


class RefreshOut(BaseModel):
    scheduled: int


def _path_out(path: ResolvedPath) -> dict:
    return {
        "source": path.source.value,
        "vertices": [v.to_dict() for v in path.vertices],
        "distance_km": round(path_distance_km(path.vertices), 2),
    }


def _endpoints(engine: RouteEngine, body: ResolveRequest) -> tuple:
    origin = body.origin.to_coordinate()
    destination = body.destination.to_coordinate()
    try:
        engine.validate_endpoints(origin, destination)
    except OutOfBoundsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return origin, destination


@router.post("/resolve", response_model=PathOut)
def resolve_route(body: ResolveRequest, engine: RouteEngine = Depends(get_engine)):
    origin, destination = _endpoints(engine, body)
    return _path_out(engine.resolve_route(origin, destination))


@router.post("/estimate", response_model=EstimateOut)
def estimate_route(body: EstimateRequest, engine: RouteEngine = Depends(get_engine)):
    origin, destination = _endpoints(engine, body)
    est = engine.resolve_and_estimate(origin, destination, rate_per_km=body.rate_per_km)
    return {
        **_path_out(est.path),
        "distance_km": round(est.distance_km, 2),
        "duration_hours": round(est.duration_hours, 2),
        "fee_estimate": est.fee_estimate,
        "distance_label": format_distance(est.distance_km * 1000.0),
        "duration_label": format_duration(est.duration_hours * 3600.0),
    }


@router.get("/{route_id}/path", response_model=CachedPathOut)
def get_cached_path(route_id: str, engine: RouteEngine = Depends(get_engine)):
    entry = engine.cache.entry(route_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="No cached path for this route")
    return {
        **_path_out(entry.path),
        "route_id": entry.route_id,
        "cached": True,
        "resolved_at": entry.resolved_at.isoformat(),
    }


@router.post("/{route_id}/path", response_model=CachedPathOut)
def cached_or_resolve(route_id: str, body: ResolveRequest, engine: RouteEngine = Depends(get_engine)):
    origin, destination = _endpoints(engine, body)
    was_cached = route_id in engine.cache
    path = engine.get_cached_or_resolve(route_id, origin, destination)
    entry = engine.cache.entry(route_id)
    return {
        **_path_out(path),
        "route_id": route_id,
        "cached": was_cached,
        "resolved_at": entry.resolved_at.isoformat() if entry is not None else None,
    }


@router.post("/refresh", response_model=RefreshOut, status_code=202)
def refresh_paths(body: RefreshRequest, engine: RouteEngine = Depends(get_engine)):
    entries = []
    for r in body.routes:
        origin, destination = _endpoints(engine, r)
        entries.append(RouteEntry(route_id=str(r.route_id), origin=origin, destination=destination, name=r.name))

    engine.refresh_cache_in_background(entries)
    return RefreshOut(scheduled=len(entries))
