"""Errors raised while locating stations and fetching readings.

Every error carries an ErrorKind so callers can branch on the failure
category instead of matching message strings.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced to the presentation layer."""

    LOCATION_UNAVAILABLE = "location_unavailable"
    NO_STATIONS_AVAILABLE = "no_stations_available"
    NO_STATIONS_IN_RANGE = "no_stations_in_range"
    NO_READING_AVAILABLE = "no_reading_available"


class AirQualityError(Exception):
    """Base class for airwatch errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LocationUnavailable(AirQualityError):
    """Location permission denied or positioning failed."""

    kind = ErrorKind.LOCATION_UNAVAILABLE


class NoStationsAvailable(AirQualityError):
    """The station directory was empty or held no usable station."""

    kind = ErrorKind.NO_STATIONS_AVAILABLE

    def __init__(self, message: str = "No air quality stations available"):
        super().__init__(message)


class NoStationsInRange(AirQualityError):
    """Every candidate station is beyond the distance threshold."""

    kind = ErrorKind.NO_STATIONS_IN_RANGE

    def __init__(self, max_distance_km: float):
        super().__init__(
            f"No air quality stations found within {max_distance_km:g} km"
        )
        self.max_distance_km = max_distance_km


class NoReadingAvailable(AirQualityError):
    """Every candidate station failed or returned an empty reading."""

    kind = ErrorKind.NO_READING_AVAILABLE

    def __init__(
        self,
        attempts: list[str] | None = None,
        last_error: Exception | None = None,
    ):
        self.attempts = list(attempts or [])
        self.last_error = last_error
        if last_error is not None:
            message = (
                f"No reading available from {len(self.attempts)} station(s); "
                f"last error: {last_error}"
            )
        else:
            message = "No reading available from any nearby station"
        super().__init__(message)
