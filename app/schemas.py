"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EstimateStatus(str, Enum):
    """Outcome of an air-quality estimate."""

    awaiting_location = "awaiting_location"
    ok = "ok"
    no_data = "no_data"
    out_of_range = "out_of_range"


class AirQualityResult(BaseModel):
    """Interpolated PM2.5 index at a location."""

    status: EstimateStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    pm25: Optional[float] = Field(
        default=None, ge=0, description="Distance-weighted corrected PM2.5 in µg/m³."
    )
    aqi: Optional[int] = Field(default=None, ge=0, le=500)
    category: Optional[str] = None
    sensor_count: int = Field(default=0, ge=0, description="Sensors used in the estimate.")
    nearest_sensor_meters: Optional[float] = Field(default=None, ge=0)
    max_distance_meters: float = Field(..., gt=0)
