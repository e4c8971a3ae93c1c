#!/usr/bin/env python3
"""Browse the fuel-station catalog from the command line.

Loads the catalog, applies the given filters and, when a position is
given, ranks the stations by distance and applies a radius.

Usage
-----
::

    python scripts/explore_stations.py --province MADRID --fuel "Gasoleo A"
    python scripts/explore_stations.py --lat 40.4168 --lng -3.7038 --radius 5

Options::

    --brand / --province / --municipality / --locality / --fuel
                         Filter constraints
    --lat, --lng         User position (enables distance ranking)
    --radius KM          Only stations within KM (needs --lat/--lng)
    --facets             Print the facet catalogs instead of stations
    --limit N            Print at most N stations (default 20)
    --json               Output as machine-readable JSON
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycarburantes import (  # noqa: E402
    CarburantesClient,
    CarburantesConfig,
    CarburantesError,
    FilterField,
    StaticGeolocation,
    StationRecord,
)


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _station_line(record: StationRecord, fuel: str | None) -> str:
    parts = [record.brand or "?", record.locality, record.municipality, record.province]
    line = " | ".join(part for part in parts if part)
    if fuel:
        price = record.price(fuel)
        line += f" | {fuel}: {price:.3f}" if price is not None else f" | {fuel}: n/a"
    if record.distance_to_user is not None:
        line += f" | {record.distance_to_user:.2f} km"
    return line


def _station_dict(record: StationRecord) -> dict[str, Any]:
    return record.model_dump(exclude={"raw"})


async def main() -> None:
    parser = argparse.ArgumentParser(description="Filter and rank fuel stations.")
    parser.add_argument("--brand", help="Brand label")
    parser.add_argument("--province", help="Province")
    parser.add_argument("--municipality", help="Municipality")
    parser.add_argument("--locality", help="Locality")
    parser.add_argument("--fuel", help="Fuel type label (e.g. 'Gasoleo A')")
    parser.add_argument("--lat", type=float, help="User latitude")
    parser.add_argument("--lng", type=float, help="User longitude")
    parser.add_argument("--radius", type=float, help="Radius in km")
    parser.add_argument("--facets", action="store_true", help="Print facet catalogs")
    parser.add_argument("--limit", type=int, default=20, help="Maximum stations to print")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")

    config = CarburantesConfig.from_env()
    geolocation = StaticGeolocation(args.lat, args.lng) if args.lat is not None else None

    async with CarburantesClient(config, geolocation=geolocation) as client:
        try:
            await client.load()
        except CarburantesError as exc:
            print(f"!! load failed: {exc}", file=sys.stderr)
            sys.exit(1)

        engine = client.engine
        selections = {
            FilterField.BRAND: args.brand,
            FilterField.PROVINCE: args.province,
            FilterField.MUNICIPALITY: args.municipality,
            FilterField.LOCALITY: args.locality,
            FilterField.FUEL_TYPE: args.fuel,
        }
        for field, value in selections.items():
            if value:
                engine.set_filter_field(field, value)

        if geolocation is not None:
            await client.locate()

        radius = args.radius if args.radius is not None else config.default_radius_km
        if radius is not None and engine.is_annotated:
            stations = client.nearby(radius)
        else:
            stations = engine.results

    if args.facets:
        catalog = engine.facets.model_dump()
        if args.json_mode:
            print(json.dumps(catalog, indent=2, ensure_ascii=False))
            return
        for name, values in catalog.items():
            print(_section(f"{name} ({len(values)})"))
            for value in values:
                print(f"  {value}")
        return

    shown = stations[: args.limit]
    if args.json_mode:
        print(json.dumps([_station_dict(s) for s in shown], indent=2, default=str, ensure_ascii=False))
        return

    print(_section(f"{len(stations)} stations (showing {len(shown)})"))
    for record in shown:
        print(f"  {_station_line(record, engine.state.fuel_type)}")


if __name__ == "__main__":
    asyncio.run(main())
