"""Tests for geo module."""

import math

import numpy as np
import pytest

from airwatch.geo.distance import distance_km, haversine, haversine_many
from airwatch.geo.nearest_station import Coordinate

BANGKOK = Coordinate(13.7563, 100.5018)
CHIANG_MAI = Coordinate(18.7883, 98.9853)


class TestHaversine:
    """Tests for Haversine distance calculation."""

    @pytest.mark.parametrize(
        "lat,lon",
        [(0.0, 0.0), (13.7563, 100.5018), (-33.8688, 151.2093), (90.0, 0.0), (-90.0, 180.0)],
    )
    def test_same_point(self, lat, lon):
        point = Coordinate(lat, lon)
        assert distance_km(point, point) == 0.0

    def test_bangkok_chiang_mai(self):
        # Should be around 580 km
        assert distance_km(BANGKOK, CHIANG_MAI) == pytest.approx(583, abs=5)

    @pytest.mark.parametrize(
        "a,b",
        [
            (BANGKOK, CHIANG_MAI),
            (Coordinate(48.8566, 2.3522), Coordinate(45.7640, 4.8357)),
            (Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)),
            (Coordinate(-45.0, 10.0), Coordinate(45.0, -170.0)),
        ],
    )
    def test_symmetry(self, a, b):
        assert distance_km(a, b) == pytest.approx(distance_km(b, a))

    def test_crosses_antimeridian(self):
        # 0.2 degrees of longitude at the equator, not 359.8
        assert distance_km(Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)) == pytest.approx(
            22.24, abs=0.1
        )

    def test_short_distance(self):
        # One hundredth of a degree of latitude is about 1.1 km
        distance = haversine(18.7883, 98.9853, 18.7983, 98.9853)
        assert 1.0 < distance < 1.2

    def test_nan_input_gives_nan(self):
        assert math.isnan(haversine(math.nan, 98.9853, 18.7883, 98.9853))


class TestHaversineMany:
    """Tests for the vectorised variant."""

    def test_matches_scalar(self):
        lats = [13.7563, 18.7983, 45.7640]
        lons = [100.5018, 98.9853, 4.8357]
        result = haversine_many(CHIANG_MAI.latitude, CHIANG_MAI.longitude, lats, lons)

        expected = [
            haversine(CHIANG_MAI.latitude, CHIANG_MAI.longitude, lat, lon)
            for lat, lon in zip(lats, lons)
        ]
        assert result == pytest.approx(expected)

    def test_nan_targets_stay_nan(self):
        result = haversine_many(0.0, 0.0, [0.0, math.nan], [1.0, 1.0])
        assert np.isfinite(result[0])
        assert np.isnan(result[1])

    def test_antipodal_points(self):
        result = haversine_many(0.0, 0.0, [0.0], [180.0])
        assert result[0] == pytest.approx(math.pi * 6371.0)


class TestCoordinate:
    """Tests for Coordinate validation and parsing."""

    @pytest.mark.parametrize("lat,lon", [(90.1, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0)])
    def test_out_of_range_rejected(self, lat, lon):
        with pytest.raises(ValueError):
            Coordinate(lat, lon)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            Coordinate(math.nan, 0.0)

    def test_parse_numeric_strings(self):
        assert Coordinate.parse("18.7883", "98.9853") == CHIANG_MAI

    @pytest.mark.parametrize(
        "lat,lon",
        [("abc", "98.9"), ("18.7", ""), (None, "98.9"), ("nan", "98.9"), ("95", "98.9")],
    )
    def test_parse_malformed_returns_none(self, lat, lon):
        assert Coordinate.parse(lat, lon) is None

    def test_immutable(self):
        with pytest.raises(AttributeError):
            CHIANG_MAI.latitude = 0.0
