"""EPA humidity correction for raw PM2.5 sensor readings."""

from __future__ import annotations

from typing import Optional

from models.records import CalibratedPoint, SensorReading

DEFAULT_HUMIDITY = 35.0

_PM_COEFFICIENT = 0.534
_HUMIDITY_COEFFICIENT = 0.0844
_INTERCEPT = 5.604


def correct_pm25(raw: float, humidity: Optional[float] = None) -> float:
    """Return the corrected concentration, never below zero."""
    if humidity is None:
        humidity = DEFAULT_HUMIDITY
    corrected = _PM_COEFFICIENT * raw - _HUMIDITY_COEFFICIENT * humidity + _INTERCEPT
    return corrected if corrected > 0 else 0.0


def calibrate_reading(reading: SensorReading) -> CalibratedPoint:
    return CalibratedPoint(
        coordinate=reading.coordinate,
        value=correct_pm25(reading.pm25_cf_1, reading.humidity),
    )
