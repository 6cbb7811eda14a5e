"""Default settings for station resolution and the DustBoy API client."""

import os
from dataclasses import dataclass, field
from enum import Enum

# DustBoy network (CMU CCDC)
DEFAULT_BASE_URL = "https://www.cmuccdc.org/api/ccdc"
STATIONS_PATH = "stations"
READING_PATH = "value"
DEFAULT_TIMEOUT = 5.0  # seconds

# IP geolocation fallback when no coordinate is given
DEFAULT_IP_LOCATION_URL = "https://ipapi.co/json/"

# Resolution
EARTH_RADIUS_KM = 6371.0
EXACT_MATCH_KM = 0.1  # Closer than this counts as standing at the station
DEFAULT_MAX_DISTANCE_KM = 10.0


class ResultMode(str, Enum):
    """Shape of a resolution result."""

    RANKED = "ranked"  # Every station in range, nearest first
    SINGLE = "single"  # Only the nearest station


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for StationResolver."""

    exact_match_km: float = EXACT_MATCH_KM
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM
    mode: ResultMode = ResultMode.RANKED
    max_results: int | None = None  # None keeps every station in range

    @classmethod
    def from_env(cls, **overrides) -> "ResolverConfig":
        """Build a config from AIRWATCH_* environment variables."""
        values = {
            "exact_match_km": _env_float("AIRWATCH_EXACT_MATCH_KM", EXACT_MATCH_KM),
            "max_distance_km": _env_float(
                "AIRWATCH_MAX_DISTANCE_KM", DEFAULT_MAX_DISTANCE_KM
            ),
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the DustBoy HTTP client."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """Build a config from AIRWATCH_* environment variables."""
        values = {
            "base_url": os.environ.get("AIRWATCH_BASE_URL") or DEFAULT_BASE_URL,
            "timeout": _env_float("AIRWATCH_TIMEOUT", DEFAULT_TIMEOUT),
        }
        values.update(overrides)
        return cls(**values)

    def url(self, *parts: str) -> str:
        """Join path segments onto the base URL."""
        return "/".join([self.base_url.rstrip("/"), *(str(p).strip("/") for p in parts)])
