"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A single sensor row decoded from the sensor network response."""

    sensor_index: int
    name: str
    coordinate: Coordinate
    confidence: float
    pm25_cf_1: float
    humidity: Optional[float] = None
    pm25_10minute: Optional[float] = None


@dataclass(frozen=True, slots=True)
class CalibratedPoint:
    """A corrected PM2.5 concentration at a sensor's location."""

    coordinate: Coordinate
    value: float


@dataclass(frozen=True, slots=True)
class BoundingBoxQuery:
    """Rectangular sensor search window plus the accepted data age."""

    northwest: Coordinate
    southeast: Coordinate
    max_age: int

    @classmethod
    def around(cls, center: Coordinate, margin: float, max_age: int) -> "BoundingBoxQuery":
        # No antimeridian or pole handling; windows crossing them are not wrapped.
        if margin <= 0:
            raise ValueError("Bounding box margin must be positive.")
        return cls(
            northwest=Coordinate(center.latitude + margin, center.longitude - margin),
            southeast=Coordinate(center.latitude - margin, center.longitude + margin),
            max_age=max_age,
        )

    def to_params(self) -> Dict[str, Union[float, int]]:
        return {
            "nwlng": self.northwest.longitude,
            "nwlat": self.northwest.latitude,
            "selng": self.southeast.longitude,
            "selat": self.southeast.latitude,
            "max_age": self.max_age,
        }
