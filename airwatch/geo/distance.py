"""Distance calculation utilities using Haversine formula."""

import math

import numpy as np

from ..config import EARTH_RADIUS_KM


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1: Latitude of first point (degrees)
        lon1: Longitude of first point (degrees)
        lat2: Latitude of second point (degrees)
        lon2: Longitude of second point (degrees)

    Returns:
        Distance in kilometers (NaN if any input is NaN)
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a a hair above 1 for antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a, b) -> float:
    """Great-circle distance in km between two Coordinates."""
    return haversine(a.latitude, a.longitude, b.latitude, b.longitude)


def haversine_many(lat: float, lon: float, lats, lons) -> np.ndarray:
    """
    Vectorised Haversine from one point to many.

    Args:
        lat: Latitude of the query point (degrees)
        lon: Longitude of the query point (degrees)
        lats: Latitudes of the targets (degrees, NaN for unknown)
        lons: Longitudes of the targets (degrees, NaN for unknown)

    Returns:
        Array of distances in kilometers; NaN where a target is NaN
    """
    lats_rad = np.radians(np.asarray(lats, dtype=float))
    lons_rad = np.radians(np.asarray(lons, dtype=float))
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)

    a = (
        np.sin((lats_rad - lat_rad) / 2) ** 2
        + math.cos(lat_rad) * np.cos(lats_rad) * np.sin((lons_rad - lon_rad) / 2) ** 2
    )
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return EARTH_RADIUS_KM * c

