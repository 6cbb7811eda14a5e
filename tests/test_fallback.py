"""Tests for fetch_with_fallback."""

import pytest
import requests

from airwatch.errors import ErrorKind, NoReadingAvailable
from airwatch.geo import RankedStation
from airwatch.stations import fetch_with_fallback
from conftest import make_station


@pytest.fixture
def candidates():
    return [
        RankedStation(make_station("s1", "18.79", "98.98"), 1.0),
        RankedStation(make_station("s2", "18.80", "98.98"), 2.0),
        RankedStation(make_station("s3", "18.81", "98.98"), 3.0),
    ]


class RecordingFetcher:
    """fetch_one stub returning (or raising) per-station outcomes."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.calls = []

    def __call__(self, station):
        self.calls.append(station.id)
        outcome = self.outcomes.get(station.id)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestFetchWithFallback:
    def test_first_success_short_circuits(self, candidates):
        fetch = RecordingFetcher({"s1": {"pm25": 12}, "s2": {"pm25": 30}})
        result = fetch_with_fallback(candidates, fetch)

        assert result.reading == {"pm25": 12}
        assert result.station.id == "s1"
        assert fetch.calls == ["s1"]

    def test_falls_through_to_third(self, candidates):
        fetch = RecordingFetcher({
            "s1": requests.ConnectionError("timeout"),
            "s2": requests.HTTPError("500 Server Error"),
            "s3": {"pm25": 8},
        })
        result = fetch_with_fallback(candidates, fetch)

        assert result.reading == {"pm25": 8}
        assert result.candidate is candidates[2]
        assert fetch.calls == ["s1", "s2", "s3"]
        assert result.attempts == ["s1", "s2", "s3"]

    def test_empty_result_counts_as_failure(self, candidates):
        fetch = RecordingFetcher({"s1": None, "s2": {}, "s3": {"pm25": 5}})
        result = fetch_with_fallback(candidates, fetch)

        assert result.station.id == "s3"
        assert fetch.calls == ["s1", "s2", "s3"]

    def test_all_failing_raises(self, candidates):
        last = RuntimeError("station s3 offline")
        fetch = RecordingFetcher({
            "s1": ValueError("bad payload"),
            "s2": None,
            "s3": last,
        })
        with pytest.raises(NoReadingAvailable) as exc_info:
            fetch_with_fallback(candidates, fetch)

        error = exc_info.value
        assert error.kind is ErrorKind.NO_READING_AVAILABLE
        assert error.last_error is last
        assert error.__cause__ is last
        assert error.attempts == ["s1", "s2", "s3"]
        assert "station s3 offline" in str(error)

    def test_all_empty_gives_generic_message(self, candidates):
        fetch = RecordingFetcher({})
        with pytest.raises(NoReadingAvailable) as exc_info:
            fetch_with_fallback(candidates, fetch)

        assert exc_info.value.last_error is None
        assert exc_info.value.__cause__ is None
        assert "No reading available" in str(exc_info.value)
        assert fetch.calls == ["s1", "s2", "s3"]

    def test_no_candidates(self):
        fetch = RecordingFetcher({})
        with pytest.raises(NoReadingAvailable):
            fetch_with_fallback([], fetch)
        assert fetch.calls == []

    def test_accepts_plain_stations(self, candidates):
        stations = [c.station for c in candidates]
        fetch = RecordingFetcher({"s2": {"pm25": 1}})
        result = fetch_with_fallback(stations, fetch)

        assert result.station is stations[1]
        assert fetch.calls == ["s1", "s2"]

    def test_last_error_survives_later_empty_result(self, candidates):
        first = requests.Timeout("read timed out")
        fetch = RecordingFetcher({"s1": first, "s2": None, "s3": None})
        with pytest.raises(NoReadingAvailable) as exc_info:
            fetch_with_fallback(candidates, fetch)
        assert exc_info.value.last_error is first
