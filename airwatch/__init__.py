"""Airwatch - air quality from the nearest DustBoy monitoring station."""

__version__ = "0.1.0"
