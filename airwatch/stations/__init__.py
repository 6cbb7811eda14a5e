"""Station API access, reading fallback and the refresh service."""

from .client import DustboyClient, Reading
from .fallback import FallbackResult, fetch_with_fallback
from .location import FixedLocationProvider, IpLocationProvider, LocationProvider
from .service import AirQualityReport, AirQualityService

__all__ = [
    "DustboyClient",
    "Reading",
    "FallbackResult",
    "fetch_with_fallback",
    "LocationProvider",
    "FixedLocationProvider",
    "IpLocationProvider",
    "AirQualityReport",
    "AirQualityService",
]
