"""
Airwatch - Main entry point.

Usage:
    python -m airwatch.main --lat 18.7883 --lon 98.9853
    python -m airwatch.main --all --max-distance 25
    python -m airwatch.main --help
"""

import argparse
import asyncio
import json
import logging
import sys
from contextlib import closing

import requests

from airwatch.config import ClientConfig, ResolverConfig
from airwatch.errors import AirQualityError
from airwatch.geo import Coordinate, StationResolver
from airwatch.stations import (
    AirQualityReport,
    AirQualityService,
    DustboyClient,
    FixedLocationProvider,
    IpLocationProvider,
)


def format_report(report: AirQualityReport) -> str:
    """Format a report as human readable text."""
    reading = report.reading
    station = report.station.station
    aqi = f"{reading.aqi:g}" if reading.aqi is not None else "N/A"

    lines = [
        f"Location:  {report.location.latitude:.6f}, {report.location.longitude:.6f}",
        f"Station:   {station.name or station.id} ({report.station.distance_km:.1f} km)",
        f"AQI:       {aqi} ({report.category.label})",
    ]
    for name, value in reading.pollutants.items():
        lines.append(f"{name + ':':<10} {value:g} µg/m³")
    if reading.timestamp:
        lines.append(f"Updated:   {reading.timestamp}")
    if len(report.attempts) > 1:
        lines.append(f"Tried:     {', '.join(report.attempts)}")
    return "\n".join(lines)


def report_to_dict(report: AirQualityReport) -> dict:
    """Convert a report to a JSON-serialisable dict."""
    reading = report.reading
    return {
        "location": {
            "latitude": report.location.latitude,
            "longitude": report.location.longitude,
        },
        "station": {
            "id": report.station.station.id,
            "name": report.station.station.name,
            "distance_km": round(report.station.distance_km, 3),
        },
        "aqi": reading.aqi,
        "label": report.category.label,
        "color": report.category.color,
        "pollutants": reading.pollutants,
        "timestamp": reading.timestamp,
        "attempts": report.attempts,
    }


def build_service(args: argparse.Namespace) -> AirQualityService:
    """Wire the service from command line arguments."""
    if args.lat is not None and args.lon is not None:
        location = FixedLocationProvider(Coordinate(args.lat, args.lon))
    else:
        location = IpLocationProvider()

    overrides = {"base_url": args.base_url} if args.base_url else {}
    client_config = ClientConfig.from_env(**overrides)

    resolver = StationResolver(ResolverConfig.from_env())
    return AirQualityService(location, DustboyClient(client_config), resolver)


def run(args: argparse.Namespace, service: AirQualityService) -> int:
    """Run one query and print the result. Returns the exit code."""
    try:
        if args.all:
            ranked = asyncio.run(service.nearby(args.max_distance))
            if args.json:
                print(json.dumps([
                    {
                        "id": r.station.id,
                        "name": r.station.name,
                        "distance_km": round(r.distance_km, 3),
                    }
                    for r in ranked
                ], ensure_ascii=False, indent=2))
            else:
                for r in ranked:
                    print(f"{r.distance_km:8.2f} km  {r.station.id}  {r.station.name}")
            return 0

        report = asyncio.run(service.refresh(args.max_distance))
    except (AirQualityError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(report_to_dict(report), ensure_ascii=False, indent=2))
    else:
        print(format_report(report))
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Airwatch - Air quality from the nearest DustBoy station"
    )
    parser.add_argument("--lat", type=float, help="Latitude (default: IP geolocation)")
    parser.add_argument("--lon", type=float, help="Longitude (default: IP geolocation)")
    parser.add_argument(
        "--max-distance",
        type=float,
        default=None,
        help="Search radius in km (default: 10)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="List every station in range instead of fetching a reading",
    )
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("--base-url", help="Station API base URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    return args


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        service = build_service(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    with closing(service.location), closing(service.client):
        code = run(args, service)
    sys.exit(code)


if __name__ == "__main__":
    main()
