"""Fetch a reading from the nearest station that can provide one."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from ..errors import NoReadingAvailable
from ..geo.nearest_station import RankedStation, Station

logger = logging.getLogger(__name__)


def _station_of(candidate: RankedStation | Station) -> Station:
    if isinstance(candidate, RankedStation):
        return candidate.station
    return candidate


@dataclass
class FallbackResult:
    """Reading plus the candidate that produced it."""

    reading: Any
    candidate: RankedStation | Station
    attempts: list[str] = field(default_factory=list)

    @property
    def station(self) -> Station:
        return _station_of(self.candidate)


def fetch_with_fallback(
    ranked: Iterable[RankedStation | Station],
    fetch_one: Callable[[Station], Any],
) -> FallbackResult:
    """
    Try each candidate in order until one yields a non-empty reading.

    Each station gets a single attempt; candidates are never fetched in
    parallel. A raised exception or an empty result moves on to the next
    candidate.

    Args:
        ranked: Candidates, nearest first
        fetch_one: Fetches the reading for one station

    Returns:
        FallbackResult for the first successful candidate

    Raises:
        NoReadingAvailable: Every candidate failed or returned nothing.
            Chained to the last exception raised, if any.
    """
    candidates: Sequence[RankedStation | Station] = list(ranked)
    attempts: list[str] = []
    last_error: Exception | None = None

    for candidate in candidates:
        station = _station_of(candidate)
        attempts.append(station.id)
        try:
            reading = fetch_one(station)
        except Exception as e:
            logger.warning("Reading fetch failed for station %s: %s", station.id, e)
            last_error = e
            continue

        if not reading:
            logger.warning("Empty reading from station %s", station.id)
            continue

        if len(attempts) > 1:
            logger.info(
                "Fallback: using station %s (tried: %s)",
                station.id,
                ", ".join(attempts),
            )
        return FallbackResult(reading=reading, candidate=candidate, attempts=attempts)

    raise NoReadingAvailable(attempts, last_error) from last_error
