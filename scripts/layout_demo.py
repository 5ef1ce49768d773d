#!/usr/bin/env python3
"""Replay a map pan over synthetic cities and print the marker diff per frame.

Usage
-----
    python scripts/layout_demo.py
    python scripts/layout_demo.py --cities 400 --frames 8 --step 0.5 --json
    python scripts/layout_demo.py --group-by coordinates --anchor bottom -v
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pymarkerlayout import MarkerAnchor, MarkerLayout, MarkerLayoutConfigError, WebMercatorView  # noqa: E402


def _synthetic_cities(count: int, seed: int) -> list[dict[str, Any]]:
    rng = random.Random(seed)
    cities: list[dict[str, Any]] = []
    for i in range(count):
        cities.append(
            {
                "id": i + 1,
                "geometry": {"type": "Point", "coordinates": [rng.uniform(-5.0, 10.0), rng.uniform(42.0, 51.0)]},
                "properties": {"name": f"city-{i + 1}", "rank": rng.randint(1, 20)},
                "sourceLayer": "City labels",
            }
        )
    return cities


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a pan sequence through the marker layout engine.")
    parser.add_argument("--cities", type=int, default=150, help="Number of synthetic city features")
    parser.add_argument("--frames", type=int, default=5, help="Number of pan steps")
    parser.add_argument("--step", type=float, default=0.75, help="Longitude shift per frame, in degrees")
    parser.add_argument("--zoom", type=float, default=5.0, help="Map zoom level")
    parser.add_argument("--seed", type=int, default=7, help="Random seed for the synthetic features")
    parser.add_argument("--anchor", default="center", choices=[a.value for a in MarkerAnchor])
    parser.add_argument("--group-by", default=None, help="Property name or 'coordinates'")
    parser.add_argument("--max", type=int, default=None, help="Maximum number of markers")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    view = WebMercatorView(_synthetic_cities(args.cities, args.seed), center=(2.5, 46.5), zoom=args.zoom)
    try:
        engine = MarkerLayout(
            view,
            {
                "layers": ["City labels"],
                "markerSize": [40, 70],
                "offset": [0, -10],
                "markerAnchor": args.anchor,
                "sortingProperty": "rank",
                "groupBy": args.group_by,
                "max": args.max,
            },
        )
    except MarkerLayoutConfigError as exc:
        parser.error(str(exc))

    report: list[dict[str, Any]] = []
    for frame in range(args.frames):
        status = engine.update()
        if status is None:
            continue
        report.append(
            {
                "frame": frame,
                "center": list(view.center),
                "new": sorted(status.new),
                "updated": sorted(status.updated),
                "removed": sorted(status.removed),
            }
        )
        lon, lat = view.center
        view.pan_to(lon + args.step, lat)

    if args.json_mode:
        print(json.dumps(report, indent=2))
        return

    for entry in report:
        print(
            f"frame {entry['frame']:>3}  center={entry['center'][0]:.2f},{entry['center'][1]:.2f}  "
            f"new={len(entry['new']):>3}  updated={len(entry['updated']):>3}  removed={len(entry['removed']):>3}"
        )


if __name__ == "__main__":
    main()
