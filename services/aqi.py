"""PM2.5 concentration to US EPA Air Quality Index conversion."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional


class Breakpoint(NamedTuple):
    """Concentration range ``[conc_low, conc_high)`` mapped onto ``[aqi_low, aqi_high]``."""

    conc_low: float
    conc_high: float
    aqi_low: int
    aqi_high: int


PM25_BREAKPOINTS: tuple[Breakpoint, ...] = (
    Breakpoint(0.0, 12.1, 0, 50),
    Breakpoint(12.1, 35.5, 51, 100),
    Breakpoint(35.5, 55.5, 101, 150),
    Breakpoint(55.5, 150.5, 151, 200),
    Breakpoint(150.5, 250.5, 201, 300),
    Breakpoint(250.5, 350.5, 301, 400),
    Breakpoint(350.5, 500.5, 401, 500),
)

_CATEGORIES: tuple[tuple[int, str], ...] = (
    (50, "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
    (300, "Very Unhealthy"),
    (500, "Hazardous"),
)


def interpolate_aqi(concentration: float) -> Optional[float]:
    """Linearly interpolate within the first breakpoint containing ``concentration``.

    Returns ``None`` when the value lies outside the table (negative, NaN or
    at least 500.5), so callers never display a clamped index.
    """
    for bp in PM25_BREAKPOINTS:
        if bp.conc_low <= concentration < bp.conc_high:
            fraction = (concentration - bp.conc_low) / (bp.conc_high - bp.conc_low)
            return bp.aqi_low + fraction * (bp.aqi_high - bp.aqi_low)
    return None


def pm25_to_aqi(concentration: float) -> Optional[int]:
    """Integer AQI for a corrected PM2.5 concentration, rounded half up."""
    value = interpolate_aqi(concentration)
    if value is None:
        return None
    return math.floor(value + 0.5)


def aqi_category(aqi: Optional[int]) -> Optional[str]:
    if aqi is None:
        return None
    for upper, label in _CATEGORIES:
        if aqi <= upper:
            return label
    return None
