"""HTTP client for the DustBoy station network (CMU CCDC API)."""

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from ..config import READING_PATH, STATIONS_PATH, ClientConfig
from ..errors import NoStationsAvailable
from ..geo.nearest_station import Station

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Reading:
    """Live measurement from one station."""

    station_id: str
    pm25: float | None = None  # µg/m³
    pm10: float | None = None  # µg/m³
    aqi: float | None = None  # US AQI
    timestamp: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, station_id: str, payload: dict[str, Any]) -> "Reading":
        """
        Build a Reading from a /value payload.

        Expected keys: pm25, pm10, us_aqi, log_datetime. Other keys are kept
        in ``raw``.
        """
        return cls(
            station_id=station_id,
            pm25=_to_float(payload.get("pm25")),
            pm10=_to_float(payload.get("pm10")),
            aqi=_to_float(payload.get("us_aqi")),
            timestamp=payload.get("log_datetime") or None,
            raw=dict(payload),
        )

    @property
    def pollutants(self) -> dict[str, float]:
        """Pollutant concentrations that were reported."""
        values = {"PM2.5": self.pm25, "PM10": self.pm10}
        return {k: v for k, v in values.items() if v is not None}


class DustboyClient:
    """
    Fetch the station directory and per-station readings.

    HTTP and network errors (requests.RequestException) propagate
    unchanged; the caller decides how to report them.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
    ):
        self.config = config or ClientConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update(self.config.headers)

    def __enter__(self) -> "DustboyClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self.session.close()

    def _get_json(self, url: str) -> Any:
        response = self.session.get(url, timeout=self.config.timeout)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    def get_stations(self) -> list[Station]:
        """
        Fetch every station in the directory.

        Records that are not objects or have no id are skipped.

        Raises:
            NoStationsAvailable: The directory returned no stations
            requests.RequestException: Network or HTTP failure
        """
        data = self._get_json(self.config.url(STATIONS_PATH))
        if not isinstance(data, list) or not data:
            raise NoStationsAvailable("Station directory returned no data")

        stations = []
        for record in data:
            if not isinstance(record, dict):
                continue
            station = Station.from_record(record)
            if not station.id:
                continue
            stations.append(station)

        if not stations:
            raise NoStationsAvailable("Station directory returned no usable stations")

        logger.info("Fetched %d stations", len(stations))
        return stations

    def get_reading(self, station: Station | str) -> Reading | None:
        """
        Fetch the latest reading for a station.

        Returns:
            Reading, or None if the station returned an empty payload
        """
        station_id = station.id if isinstance(station, Station) else str(station)
        data = self._get_json(self.config.url(READING_PATH, station_id))

        # Some deployments wrap the payload in a one-element list
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict) or not data:
            logger.debug("Empty reading for station %s", station_id)
            return None

        return Reading.from_payload(station_id, data)
