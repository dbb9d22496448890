"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import AirQualityResult
from models.records import Coordinate
from services.pipeline import SensorQueryPipeline, build_default_pipeline
from services.purpleair import MissingAPIKeyError, SensorFetchError

router = APIRouter()


def get_pipeline() -> SensorQueryPipeline:
    try:
        return build_default_pipeline()
    except MissingAPIKeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc


@router.get(
    "/aqi",
    response_model=AirQualityResult,
    summary="Estimate the PM2.5 AQI at a location from nearby sensors.",
)
def get_air_quality(
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    pipeline: SensorQueryPipeline = Depends(get_pipeline),
) -> AirQualityResult:
    center: Optional[Coordinate] = None
    if latitude is not None and longitude is not None:
        center = Coordinate(latitude=latitude, longitude=longitude)
    try:
        return pipeline.estimate(center)
    except SensorFetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /aqi?latitude=..&longitude=.. for estimates."}
