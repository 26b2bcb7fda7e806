"""FastAPI REST backend for the route resolver."""
from __future__ import annotations

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from route_resolver.cache.redis_client import redis_healthy
from route_resolver.core.engine import RouteEngine
from route_resolver.deps import get_engine
from route_resolver.geo.bounds import is_inside
from route_resolver.contracts.route_contract import Coordinate
from route_resolver.routers import routes

app = FastAPI(title="Route Resolver", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(routes.router)


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class BoundsOut(BaseModel):
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


class PointIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class InsideOut(BaseModel):
    inside: bool


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health(engine: RouteEngine = Depends(get_engine)):
    return {"status": "ok", "redis": redis_healthy(engine.cache.redis_url), "cached_routes": len(engine.cache)}


@app.get("/bounds", response_model=BoundsOut)
def get_bounds(engine: RouteEngine = Depends(get_engine)):
    return engine.bounds.to_dict()


@app.post("/bounds/check", response_model=InsideOut)
def check_point(body: PointIn, engine: RouteEngine = Depends(get_engine)):
    return InsideOut(inside=is_inside(Coordinate(body.lat, body.lng), engine.bounds))
