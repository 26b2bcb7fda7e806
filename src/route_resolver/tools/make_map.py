from __future__ import annotations

import json
from pathlib import Path


SOURCE_COLOR = {
    "primary": "#2ecc71",
    "secondary": "#f1c40f",
    "fallback": "#e74c3c",
}


def render_html(run: dict) -> str:
    vertices = [[v["lat"], v["lng"]] for v in run.get("vertices", [])]
    if len(vertices) < 2:
        raise ValueError("run has fewer than two vertices")

    b = run.get("bounds")
    box = [[b["min_lat"], b["min_lng"]], [b["max_lat"], b["max_lng"]]] if b else None
    anchors = [[a["lat"], a["lng"]] for a in run.get("anchors", [])]
    source = run.get("source", "fallback")
    color = SOURCE_COLOR.get(source, "#3498db")
    # straight lines are drawn dashed so nobody mistakes them for a road
    dash = "'8 8'" if source == "fallback" else "null"
    summary = (
        f"{source} · {run.get('distance_km', 0):.1f} km · "
        f"{run.get('duration_hours', 0):.1f} h · fee {run.get('fee_estimate', 0):,.0f}"
    )

    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Route Resolver - Last Route</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css" />
  <style>
    body {{ margin: 0; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }}
    #map {{ height: 100vh; width: 100vw; }}
  </style>
</head>
<body>
<div id="map"></div>
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<script>
  const path = {json.dumps(vertices)};
  const anchors = {json.dumps(anchors)};
  const box = {json.dumps(box)};

  const map = L.map('map');

  L.tileLayer('https://{{s}}.tile.openstreetmap.org/{{z}}/{{x}}/{{y}}.png', {{
    maxZoom: 18,
    attribution: '&copy; OpenStreetMap contributors'
  }}).addTo(map);

  if (box) {{
    L.rectangle(box, {{ color: '#7f8c8d', weight: 1, fill: false }}).addTo(map);
  }}

  const line = L.polyline(path, {{ color: '{color}', weight: 5, opacity: 0.9, dashArray: {dash} }})
    .addTo(map)
    .bindPopup({json.dumps(summary)});

  L.marker(path[0]).addTo(map).bindPopup('Origin');
  L.marker(path[path.length - 1]).addTo(map).bindPopup('Destination');
  anchors.forEach((a) => L.circleMarker(a, {{ radius: 5, color: '#34495e' }}).addTo(map));

  map.fitBounds(line.getBounds().pad(0.2));
</script>
</body>
</html>
"""


def main() -> None:
    runs_dir = Path("runs")
    run_path = runs_dir / "last_route.json"
    out_path = runs_dir / "last_route_map.html"

    run = json.loads(run_path.read_text(encoding="utf-8"))
    if not run.get("vertices"):
        raise SystemExit("No vertices found in runs/last_route.json")

    out_path.write_text(render_html(run), encoding="utf-8")
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
