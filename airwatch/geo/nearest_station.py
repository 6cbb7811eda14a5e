"""Rank monitoring stations by distance from the user."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np

from ..config import ResolverConfig, ResultMode
from ..errors import NoStationsAvailable, NoStationsInRange
from .distance import haversine_many

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        # NaN fails both comparisons
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @classmethod
    def parse(cls, latitude: Any, longitude: Any) -> "Coordinate | None":
        """
        Build a Coordinate from raw API values (usually numeric strings).

        Returns:
            Coordinate, or None if either value is missing, non-numeric
            or out of range
        """
        try:
            return cls(float(latitude), float(longitude))
        except (TypeError, ValueError):
            return None


@dataclass(frozen=True)
class Station:
    """Air quality monitoring station."""

    id: str
    coordinate: Coordinate | None
    name: str = ""
    status: str = ""
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Station":
        """
        Build a Station from a DustBoy directory record.

        Expected keys: dustboy_id, dustboy_lat, dustboy_lng, dustboy_name_en,
        dustboy_name_th, dustboy_alias, dustboy_status
        """
        raw_id = record.get("dustboy_id")
        name = (
            record.get("dustboy_name_en")
            or record.get("dustboy_name_th")
            or record.get("dustboy_alias")
            or ""
        )
        return cls(
            id="" if raw_id is None else str(raw_id).strip(),
            coordinate=Coordinate.parse(
                record.get("dustboy_lat"), record.get("dustboy_lng")
            ),
            name=str(name).strip(),
            status=str(record.get("dustboy_status", "") or ""),
            attributes=dict(record),
        )


@dataclass(frozen=True)
class RankedStation:
    """Station paired with its distance from the query point."""

    station: Station
    distance_km: float


class StationResolver:
    """
    Resolve the stations nearest to a user location.

    A station closer than ``exact_match_km`` is treated as the user's own
    station and returned alone. Otherwise every station within the distance
    threshold is returned, nearest first, ties kept in input order.
    """

    def __init__(self, config: ResolverConfig | None = None):
        self.config = config or ResolverConfig()

    def rank(
        self, user_location: Coordinate, stations: Iterable[Station]
    ) -> list[RankedStation]:
        """
        Rank every station with a usable coordinate by distance.

        Stations whose coordinate is missing or malformed get a NaN
        distance and are left out.
        """
        stations = list(stations)
        if not stations:
            return []

        lats = [s.coordinate.latitude if s.coordinate else math.nan for s in stations]
        lons = [s.coordinate.longitude if s.coordinate else math.nan for s in stations]
        distances = haversine_many(
            user_location.latitude, user_location.longitude, lats, lons
        )

        for idx in np.flatnonzero(~np.isfinite(distances)):
            logger.debug(
                "Skipping station %s due to invalid coordinates.", stations[idx].id
            )

        order = np.argsort(distances, kind="stable")
        return [
            RankedStation(station=stations[idx], distance_km=float(distances[idx]))
            for idx in order
            if np.isfinite(distances[idx])
        ]

    def resolve_nearby(
        self,
        user_location: Coordinate,
        stations: Iterable[Station],
        max_distance_km: float | None = None,
    ) -> list[RankedStation]:
        """
        Find stations near the user, nearest first.

        Args:
            user_location: Query point
            stations: Candidate stations
            max_distance_km: Distance threshold (defaults to the config value)

        Returns:
            Ranked stations; a single station on an exact match

        Raises:
            NoStationsAvailable: No candidates, or none with a usable coordinate
            NoStationsInRange: Every candidate is beyond the threshold
        """
        if max_distance_km is None:
            max_distance_km = self.config.max_distance_km

        stations = list(stations)
        if not stations:
            raise NoStationsAvailable()

        ranked = self.rank(user_location, stations)
        if not ranked:
            raise NoStationsAvailable(
                f"None of the {len(stations)} stations has a usable location"
            )

        nearest = ranked[0]
        if nearest.distance_km < self.config.exact_match_km:
            logger.info(
                "Exact match: station %s at %.3f km",
                nearest.station.id,
                nearest.distance_km,
            )
            return [nearest]

        in_range = [r for r in ranked if r.distance_km <= max_distance_km]
        if not in_range:
            raise NoStationsInRange(max_distance_km)

        if self.config.max_results is not None:
            in_range = in_range[: self.config.max_results]

        logger.info(
            "Found %d station(s) within %g km, nearest %s at %.2f km",
            len(in_range),
            max_distance_km,
            in_range[0].station.id,
            in_range[0].distance_km,
        )
        return in_range

    def resolve_nearest(
        self,
        user_location: Coordinate,
        stations: Iterable[Station],
        max_distance_km: float | None = None,
    ) -> RankedStation:
        """Return only the nearest station in range."""
        return self.resolve_nearby(user_location, stations, max_distance_km)[0]

    def resolve(
        self,
        user_location: Coordinate,
        stations: Iterable[Station],
        max_distance_km: float | None = None,
    ) -> list[RankedStation]:
        """Resolve in the shape selected by ``config.mode``."""
        ranked = self.resolve_nearby(user_location, stations, max_distance_km)
        if self.config.mode is ResultMode.SINGLE:
            return ranked[:1]
        return ranked


def resolve_nearby(
    user_location: Coordinate,
    stations: Iterable[Station],
    max_distance_km: float | None = None,
) -> list[RankedStation]:
    """Rank stations near ``user_location`` with the default configuration."""
    return StationResolver().resolve_nearby(user_location, stations, max_distance_km)
