from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from route_resolver.config import settings
from route_resolver.contracts.route_contract import Coordinate, Tier
from route_resolver.core.engine import RouteEngine
from route_resolver.core.estimate import format_distance, format_duration
from route_resolver.errors import OutOfBoundsError

TIER_STYLE = {
    Tier.PRIMARY: "green",
    Tier.SECONDARY: "yellow",
    Tier.FALLBACK: "red",
}


def _parse_point(text: str) -> Coordinate:
    try:
        lat, lng = (float(p) for p in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LAT,LNG, got '{text}'")
    return Coordinate(lat, lng)


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def main() -> None:
    ap = argparse.ArgumentParser(description="Resolve a boundary-compliant road path and estimate it.")
    ap.add_argument("--origin", type=_parse_point, required=True, help="LAT,LNG e.g. 21.0285,105.8542")
    ap.add_argument("--dest", type=_parse_point, required=True, help="LAT,LNG e.g. 10.8231,106.6297")
    ap.add_argument("--provider", default=settings.provider, help="e.g. osrm+directions, mock")
    ap.add_argument("--rate", type=float, default=None, help="Fee per km (default from settings)")
    ap.add_argument("--save", action="store_true", help="Write runs/last_route.json for make_map")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    console = Console()
    engine = RouteEngine.from_settings(settings, provider=args.provider)

    try:
        engine.validate_endpoints(args.origin, args.dest)
    except OutOfBoundsError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(2)

    anchors = engine.waypoints_for(args.origin, args.dest)
    est = engine.resolve_and_estimate(args.origin, args.dest, rate_per_km=args.rate)
    path = est.path
    style = TIER_STYLE.get(path.source, "white")

    table = Table(title="Route resolution")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Origin", f"{args.origin.lat:.5f}, {args.origin.lng:.5f}")
    table.add_row("Destination", f"{args.dest.lat:.5f}, {args.dest.lng:.5f}")
    table.add_row("Anchors", str(len(anchors) - 2))
    table.add_row("Served by", f"[{style}]{path.source.value}[/{style}]")
    table.add_row("Vertices", str(len(path.vertices)))
    table.add_row("Distance", format_distance(est.distance_km * 1000.0))
    table.add_row("Duration", format_duration(est.duration_hours * 3600.0))
    table.add_row("Fee", f"{est.fee_estimate:,.0f}")
    console.print(table)

    if path.source == Tier.FALLBACK:
        console.print("[red]Straight-line estimate: routing services were unavailable.[/red]")

    if args.save:
        out = Path("runs") / "last_route.json"
        _save_json(
            out,
            {
                **path.to_dict(),
                "anchors": [c.to_dict() for c in anchors[1:-1]],
                "bounds": engine.bounds.to_dict(),
                "distance_km": est.distance_km,
                "duration_hours": est.duration_hours,
                "fee_estimate": est.fee_estimate,
            },
        )
        console.print(f"Saved: {out.resolve()}")


if __name__ == "__main__":
    main()
