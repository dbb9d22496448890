"""Inverse-distance weighted aggregation of calibrated sensor points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from models.records import CalibratedPoint, Coordinate
from services.geodesy import distance_meters

# Co-located sensors are weighted as if one meter away instead of infinitely.
_MIN_DISTANCE_METERS = 1.0


@dataclass
class AggregationSummary:
    """Weighted estimate for a batch of points, with simple metadata."""

    point_count: int = 0
    estimate: Optional[float] = None
    nearest_meters: Optional[float] = None


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    power: int = 2

    def aggregate(
        self, points: Iterable[CalibratedPoint], reference: Coordinate
    ) -> AggregationSummary:
        summary = AggregationSummary()
        weighted_sum = 0.0
        weight_total = 0.0

        for point in points:
            distance = distance_meters(reference, point.coordinate)
            summary.point_count += 1
            if summary.nearest_meters is None or distance < summary.nearest_meters:
                summary.nearest_meters = distance

            if distance == 0:
                distance = _MIN_DISTANCE_METERS
            weight = 1.0 / distance**self.power
            weight_total += weight
            weighted_sum += weight * point.value

        if weight_total > 0:
            summary.estimate = weighted_sum / weight_total

        return summary

    def weighted_estimate(
        self, points: Iterable[CalibratedPoint], reference: Coordinate
    ) -> Optional[float]:
        """IDW estimate at ``reference``, or ``None`` when there is nothing to weigh."""
        return self.aggregate(points, reference).estimate
