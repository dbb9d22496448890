"""Sensor query pipeline: fetch, filter, calibrate, weight and map to AQI."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from app.schemas import AirQualityResult, EstimateStatus
from models.records import BoundingBoxQuery, Coordinate, SensorReading
from services.aggregator import AggregationSummary, Aggregator
from services.aqi import aqi_category, pm25_to_aqi
from services.calibration import calibrate_reading
from services.decoder import decode_sensor_table
from services.geodesy import distance_meters
from services.purpleair import SENSOR_FIELDS, MissingAPIKeyError, PurpleAirClient
from settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    margin_degrees: float = 1.0
    max_age_seconds: int = 20 * 60
    min_confidence: int = 70
    max_distance_meters: float = 10_000.0


class SensorQueryPipeline:
    """Estimates PM2.5 at a coordinate from nearby PurpleAir sensors.

    Each call issues exactly one sensor query and holds no state between
    calls. Transport and decode failures propagate as ``SensorFetchError``.
    """

    def __init__(
        self,
        client: PurpleAirClient,
        aggregator: Aggregator,
        config: PipelineConfig = PipelineConfig(),
    ) -> None:
        self.client = client
        self.aggregator = aggregator
        self.config = config

    def close(self) -> None:
        self.client.close()

    def fetch_nearby(
        self,
        center: Coordinate,
        margin_degrees: Optional[float] = None,
        max_age_seconds: Optional[int] = None,
        min_confidence: Optional[int] = None,
        max_distance_meters: Optional[float] = None,
    ) -> Optional[float]:
        """Weighted corrected PM2.5 around ``center``, or ``None`` if no sensor qualifies."""
        return self._summarize(
            center,
            margin_degrees=margin_degrees,
            max_age_seconds=max_age_seconds,
            min_confidence=min_confidence,
            max_distance_meters=max_distance_meters,
        ).estimate

    def estimate(self, center: Optional[Coordinate]) -> AirQualityResult:
        max_distance = self.config.max_distance_meters
        if center is None:
            return AirQualityResult(
                status=EstimateStatus.awaiting_location,
                max_distance_meters=max_distance,
            )

        summary = self._summarize(center)
        aqi: Optional[int] = None
        if summary.estimate is None:
            status = EstimateStatus.no_data
        else:
            aqi = pm25_to_aqi(summary.estimate)
            status = EstimateStatus.ok if aqi is not None else EstimateStatus.out_of_range

        logger.info(
            "Estimated air quality",
            extra={
                "latitude": center.latitude,
                "longitude": center.longitude,
                "estimate_status": status.value,
                "pm25": summary.estimate,
                "aqi": aqi,
            },
        )
        return AirQualityResult(
            status=status,
            latitude=center.latitude,
            longitude=center.longitude,
            pm25=summary.estimate,
            aqi=aqi,
            category=aqi_category(aqi),
            sensor_count=summary.point_count,
            nearest_sensor_meters=summary.nearest_meters,
            max_distance_meters=max_distance,
        )

    def _summarize(
        self,
        center: Coordinate,
        margin_degrees: Optional[float] = None,
        max_age_seconds: Optional[int] = None,
        min_confidence: Optional[int] = None,
        max_distance_meters: Optional[float] = None,
    ) -> AggregationSummary:
        config = self.config
        query = BoundingBoxQuery.around(
            center,
            margin=config.margin_degrees if margin_degrees is None else margin_degrees,
            max_age=config.max_age_seconds if max_age_seconds is None else max_age_seconds,
        )

        start_time = time.perf_counter()
        payload = self.client.fetch_sensors(query, SENSOR_FIELDS)
        readings = decode_sensor_table(payload)
        kept = self._filter(
            readings,
            center,
            min_confidence=config.min_confidence if min_confidence is None else min_confidence,
            max_distance_meters=(
                config.max_distance_meters
                if max_distance_meters is None
                else max_distance_meters
            ),
        )
        summary = self.aggregator.aggregate(
            (calibrate_reading(reading) for reading in kept), center
        )

        logger.debug(
            "Sensor query processed",
            extra={
                "sensor_count": len(readings),
                "kept_count": len(kept),
                "elapsed_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return summary

    @staticmethod
    def _filter(
        readings: List[SensorReading],
        center: Coordinate,
        min_confidence: int,
        max_distance_meters: float,
    ) -> List[SensorReading]:
        return [
            reading
            for reading in readings
            if reading.confidence > min_confidence
            and distance_meters(reading.coordinate, center) < max_distance_meters
        ]


@lru_cache
def build_default_pipeline() -> SensorQueryPipeline:
    """Factory that wires the pipeline from environment settings."""
    settings = get_settings()
    if not settings.purpleair_api_key:
        raise MissingAPIKeyError(
            "PURPLEAIR_READ_KEY is missing. Add it to your environment."
        )
    client = PurpleAirClient(
        api_key=settings.purpleair_api_key,
        base_url=settings.purpleair_base_url,
        timeout=settings.request_timeout,
    )
    config = PipelineConfig(
        margin_degrees=settings.margin_degrees,
        max_age_seconds=settings.max_age_seconds,
        min_confidence=settings.min_confidence,
        max_distance_meters=settings.max_distance_meters,
    )
    return SensorQueryPipeline(client=client, aggregator=Aggregator(), config=config)


def shutdown_default_pipeline() -> None:
    """Close the cached pipeline's HTTP client, if one was built."""
    if build_default_pipeline.cache_info().currsize:
        build_default_pipeline().close()
    build_default_pipeline.cache_clear()
