"""
FastAPI web interface for Airwatch.

Shows the air quality at the nearest DustBoy station and exposes the same
data as JSON.
"""

from pathlib import Path
from typing import Iterator

import requests
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from airwatch.config import ClientConfig, ResolverConfig
from airwatch.errors import AirQualityError, ErrorKind
from airwatch.geo import Coordinate, RankedStation, StationResolver
from airwatch.stations import (
    AirQualityReport,
    AirQualityService,
    DustboyClient,
    FixedLocationProvider,
)

# Paths
BASE_DIR = Path(__file__).parent
TEMPLATES_DIR = BASE_DIR / "templates"

ERROR_STATUS = {
    ErrorKind.LOCATION_UNAVAILABLE: 503,
    ErrorKind.NO_STATIONS_AVAILABLE: 404,
    ErrorKind.NO_STATIONS_IN_RANGE: 404,
    ErrorKind.NO_READING_AVAILABLE: 502,
}

# Initialize FastAPI
app = FastAPI(
    title="Airwatch",
    description="Air quality from the nearest monitoring station",
    version="0.1.0",
)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Global instance (created on startup)
resolver: StationResolver | None = None


@app.on_event("startup")
async def startup_event():
    """Load the resolver configuration."""
    global resolver
    resolver = StationResolver(ResolverConfig.from_env())
    print(f"Using station API at {ClientConfig.from_env().base_url}")


def get_client() -> Iterator[DustboyClient]:
    """One client per request, closed when the request finishes."""
    with DustboyClient(ClientConfig.from_env()) as client:
        yield client


def get_resolver() -> StationResolver:
    global resolver
    if resolver is None:
        resolver = StationResolver(ResolverConfig.from_env())
    return resolver


class StationInfo(BaseModel):
    """Station with its distance from the query point."""

    id: str
    name: str
    latitude: float | None = None
    longitude: float | None = None
    distance_km: float


class AirQualityResponse(BaseModel):
    """Response model for the air quality endpoint."""

    latitude: float
    longitude: float
    station: StationInfo
    aqi: float | None = None
    label: str
    color: str
    pollutants: dict[str, float]
    timestamp: str | None = None
    attempts: list[str]


class ErrorResponse(BaseModel):
    error: str
    detail: str


def station_info(ranked: RankedStation) -> StationInfo:
    station = ranked.station
    return StationInfo(
        id=station.id,
        name=station.name,
        latitude=station.coordinate.latitude if station.coordinate else None,
        longitude=station.coordinate.longitude if station.coordinate else None,
        distance_km=round(ranked.distance_km, 3),
    )


def to_response(report: AirQualityReport) -> AirQualityResponse:
    return AirQualityResponse(
        latitude=report.location.latitude,
        longitude=report.location.longitude,
        station=station_info(report.station),
        aqi=report.reading.aqi,
        label=report.category.label,
        color=report.category.color,
        pollutants=report.reading.pollutants,
        timestamp=report.reading.timestamp,
        attempts=report.attempts,
    )


def make_service(
    lat: float, lon: float, client: DustboyClient, resolver: StationResolver
) -> AirQualityService:
    return AirQualityService(
        FixedLocationProvider(Coordinate(lat, lon)), client, resolver
    )


@app.exception_handler(AirQualityError)
async def air_quality_error_handler(request: Request, exc: AirQualityError):
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, 500),
        content={"error": exc.kind.value, "detail": str(exc)},
    )


@app.exception_handler(requests.RequestException)
async def upstream_error_handler(request: Request, exc: requests.RequestException):
    return JSONResponse(
        status_code=502,
        content={"error": "upstream_unavailable", "detail": str(exc)},
    )


@app.get(
    "/api/air-quality",
    response_model=AirQualityResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def api_air_quality(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    max_distance_km: float | None = Query(default=None, gt=0),
    client: DustboyClient = Depends(get_client),
    resolver: StationResolver = Depends(get_resolver),
) -> AirQualityResponse:
    """Reading from the nearest station that has one."""
    service = make_service(lat, lon, client, resolver)
    report = await service.refresh(max_distance_km)
    return to_response(report)


@app.get(
    "/api/stations/nearby",
    response_model=list[StationInfo],
    responses={404: {"model": ErrorResponse}},
)
async def api_nearby_stations(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    max_distance_km: float | None = Query(default=None, gt=0),
    client: DustboyClient = Depends(get_client),
    resolver: StationResolver = Depends(get_resolver),
) -> list[StationInfo]:
    """Stations in range, nearest first."""
    service = make_service(lat, lon, client, resolver)
    ranked = await service.nearby(max_distance_km)
    return [station_info(r) for r in ranked]


@app.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    lat: float | None = Query(default=None, ge=-90, le=90),
    lon: float | None = Query(default=None, ge=-180, le=180),
    client: DustboyClient = Depends(get_client),
    resolver: StationResolver = Depends(get_resolver),
):
    """Render the air quality card, or the location form if none was given."""
    context = {"lat": lat, "lon": lon}

    if lat is not None and lon is not None:
        service = make_service(lat, lon, client, resolver)
        try:
            context["result"] = to_response(await service.refresh())
        except (AirQualityError, requests.RequestException) as e:
            context["error"] = str(e)

    return templates.TemplateResponse(request, "index.html", context)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "resolver_loaded": resolver is not None,
    }
