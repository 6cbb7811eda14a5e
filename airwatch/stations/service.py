"""End-to-end refresh: locate the user, pick a station, fetch its reading."""

import asyncio
import logging
from dataclasses import dataclass, field

from ..aqi import AqiCategory, classify_aqi
from ..geo.nearest_station import Coordinate, RankedStation, StationResolver
from .client import DustboyClient, Reading
from .fallback import fetch_with_fallback
from .location import LocationProvider

logger = logging.getLogger(__name__)


@dataclass
class AirQualityReport:
    """Result of one refresh."""

    location: Coordinate
    station: RankedStation
    reading: Reading
    category: AqiCategory
    candidates: list[RankedStation] = field(default_factory=list)
    attempts: list[str] = field(default_factory=list)


class AirQualityService:
    """
    Glue between the location source, the station API and the resolver.

    Every refresh builds fresh inputs; nothing is shared between calls.
    """

    def __init__(
        self,
        location: LocationProvider,
        client: DustboyClient,
        resolver: StationResolver | None = None,
    ):
        self.location = location
        self.client = client
        self.resolver = resolver or StationResolver()

    async def locate(self) -> tuple[Coordinate, list]:
        """Fetch the user location and the station directory concurrently."""
        return await asyncio.gather(
            asyncio.to_thread(self.location.current),
            asyncio.to_thread(self.client.get_stations),
        )

    async def nearby(self, max_distance_km: float | None = None) -> list[RankedStation]:
        """Ranked stations near the user."""
        user_location, stations = await self.locate()
        return self.resolver.resolve(user_location, stations, max_distance_km)

    async def refresh(self, max_distance_km: float | None = None) -> AirQualityReport:
        """
        Produce a report for the nearest station that returns a reading.

        Raises:
            LocationUnavailable: The location source failed
            NoStationsAvailable: The directory was empty
            NoStationsInRange: No station within the threshold
            NoReadingAvailable: Every candidate failed
        """
        user_location, stations = await self.locate()
        candidates = self.resolver.resolve(user_location, stations, max_distance_km)

        # Sequential: stop at the first station that answers
        result = await asyncio.to_thread(
            fetch_with_fallback, candidates, self.client.get_reading
        )

        reading = result.reading
        logger.info(
            "Reading from station %s: AQI %s", result.station.id, reading.aqi
        )
        return AirQualityReport(
            location=user_location,
            station=result.candidate,
            reading=reading,
            category=classify_aqi(reading.aqi),
            candidates=candidates,
            attempts=result.attempts,
        )
