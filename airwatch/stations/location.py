"""Sources for the user's current location."""

import logging
from typing import Protocol

import requests

from ..config import DEFAULT_IP_LOCATION_URL, DEFAULT_TIMEOUT
from ..errors import LocationUnavailable
from ..geo.nearest_station import Coordinate

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Anything that can report where the user is."""

    def current(self) -> Coordinate:
        """Return the current location or raise LocationUnavailable."""
        ...

    def close(self) -> None:
        ...


class FixedLocationProvider:
    """Location supplied up front (query parameters, CLI flags)."""

    def __init__(self, coordinate: Coordinate):
        self.coordinate = coordinate

    def current(self) -> Coordinate:
        return self.coordinate

    def close(self) -> None:
        pass


class IpLocationProvider:
    """
    Approximate location from an IP geolocation service.

    Accepts either ``latitude``/``longitude`` (ipapi.co) or ``lat``/``lon``
    (ip-api.com) keys in the response.
    """

    def __init__(
        self,
        url: str = DEFAULT_IP_LOCATION_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Close the underlying session if this provider created it."""
        if self._owns_session:
            self.session.close()

    def current(self) -> Coordinate:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise LocationUnavailable(f"Location lookup failed: {e}") from e

        if not isinstance(data, dict):
            raise LocationUnavailable("Location lookup returned no data")

        coordinate = Coordinate.parse(
            data.get("latitude", data.get("lat")),
            data.get("longitude", data.get("lon")),
        )
        if coordinate is None:
            raise LocationUnavailable("Location lookup returned no coordinates")

        logger.info(
            "Location: %.4f, %.4f", coordinate.latitude, coordinate.longitude
        )
        return coordinate
