"""Shared fixtures: fake HTTP session and fake station client."""

import json

import pytest
import requests

from airwatch.geo import Coordinate, Station
from airwatch.stations import Reading

# Chiang Mai city centre
USER = Coordinate(18.7883, 98.9853)


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else json.dumps(payload).encode()

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session; maps URLs to responses."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.headers = {}
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        response = self.responses.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse(status_code=404)
        return response

    def close(self):
        self.closed = True


class FakeClient:
    """Stands in for DustboyClient."""

    def __init__(self, stations, readings=None):
        self.stations = stations
        self.readings = readings or {}
        self.reading_calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.closed = True

    def get_stations(self):
        if isinstance(self.stations, Exception):
            raise self.stations
        return self.stations

    def get_reading(self, station):
        self.reading_calls.append(station.id)
        result = self.readings.get(station.id)
        if isinstance(result, Exception):
            raise result
        return result


def make_station(station_id, lat, lon, name=""):
    return Station(
        id=station_id,
        coordinate=Coordinate.parse(lat, lon),
        name=name or f"Station {station_id}",
    )


@pytest.fixture
def user():
    return USER


@pytest.fixture
def stations():
    # Roughly 1, 3 and 6 km north of the user, listed out of order
    return [
        make_station("far", 18.8423, 98.9853, "Far"),
        make_station("near", 18.7973, 98.9853, "Near"),
        make_station("mid", 18.8153, 98.9853, "Mid"),
    ]


@pytest.fixture
def reading():
    return Reading(station_id="near", pm25=21.0, pm10=35.0, aqi=70.0, timestamp="2024-03-01 10:00")
