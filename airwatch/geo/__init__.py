"""Geolocation module for finding nearest stations."""

from .distance import distance_km, haversine, haversine_many
from .nearest_station import (
    Coordinate,
    RankedStation,
    Station,
    StationResolver,
    resolve_nearby,
)

__all__ = [
    "haversine",
    "haversine_many",
    "distance_km",
    "Coordinate",
    "Station",
    "RankedStation",
    "StationResolver",
    "resolve_nearby",
]
