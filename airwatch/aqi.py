"""US AQI categories used for display."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class AqiCategory:
    """Display label and colour for an AQI value."""

    label: str
    color: str


UNKNOWN = AqiCategory("Unknown", "#3b82f6")

# (upper bound inclusive, category)
AQI_BREAKPOINTS = [
    (50, AqiCategory("Good", "#10b981")),
    (100, AqiCategory("Moderate", "#f59e0b")),
    (150, AqiCategory("Unhealthy for Sensitive Groups", "#ef4444")),
]
UNHEALTHY = AqiCategory("Unhealthy", "#7f1d1d")


def classify_aqi(aqi: float | None) -> AqiCategory:
    """
    Map an AQI value to its category.

    A missing or zero AQI is reported as Unknown.
    """
    if not aqi or math.isnan(aqi):
        return UNKNOWN
    for upper, category in AQI_BREAKPOINTS:
        if aqi <= upper:
            return category
    return UNHEALTHY
