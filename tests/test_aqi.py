"""Unit tests for the PM2.5 breakpoint mapper."""

from __future__ import annotations

import math

import pytest

from services.aqi import PM25_BREAKPOINTS, aqi_category, interpolate_aqi, pm25_to_aqi


def test_table_is_contiguous() -> None:
    for lower, upper in zip(PM25_BREAKPOINTS, PM25_BREAKPOINTS[1:]):
        assert lower.conc_high == upper.conc_low
        assert lower.aqi_high + 1 == upper.aqi_low
    assert PM25_BREAKPOINTS[0].conc_low == 0.0
    assert PM25_BREAKPOINTS[-1].conc_high == 500.5


@pytest.mark.parametrize(
    ("concentration", "expected"),
    [
        (0.0, 0),
        (12.1, 51),
        (35.5, 101),
        (55.5, 151),
        (150.5, 201),
        (250.5, 301),
        (350.5, 401),
    ],
)
def test_lower_bounds_are_inclusive(concentration: float, expected: int) -> None:
    assert interpolate_aqi(concentration) == expected
    assert pm25_to_aqi(concentration) == expected


def test_interpolates_within_band() -> None:
    assert interpolate_aqi(6.05) == pytest.approx(25.0)
    assert pm25_to_aqi(7.99) == 33


def test_out_of_table_values_are_unavailable() -> None:
    assert interpolate_aqi(500.5) is None
    assert pm25_to_aqi(500.5) is None
    assert pm25_to_aqi(1200.0) is None
    assert pm25_to_aqi(-0.1) is None
    assert pm25_to_aqi(math.nan) is None


def test_top_of_table_stays_within_scale() -> None:
    assert pm25_to_aqi(500.4) == 500


def test_mapping_is_monotonic() -> None:
    values = [interpolate_aqi(step / 10) for step in range(5005)]

    assert all(value is not None for value in values)
    assert all(a <= b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize(
    ("aqi", "label"),
    [
        (0, "Good"),
        (50, "Good"),
        (51, "Moderate"),
        (101, "Unhealthy for Sensitive Groups"),
        (151, "Unhealthy"),
        (250, "Very Unhealthy"),
        (500, "Hazardous"),
        (None, None),
    ],
)
def test_aqi_category(aqi, label) -> None:
    assert aqi_category(aqi) == label
