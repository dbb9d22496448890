from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_API_KEY_ENV = "PURPLEAIR_READ_KEY"
_BASE_URL_ENV = "PURPLEAIR_BASE_URL"
_TIMEOUT_ENV = "PURPLEAIR_TIMEOUT"
_MARGIN_ENV = "AQI_MARGIN_DEGREES"
_MAX_AGE_ENV = "AQI_MAX_AGE_SECONDS"
_MIN_CONFIDENCE_ENV = "AQI_MIN_CONFIDENCE"
_MAX_DISTANCE_ENV = "AQI_MAX_DISTANCE_METERS"
_LOCATION_STORE_ENV = "AQI_LOCATION_STORE_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_BASE_URL = "https://api.purpleair.com/v1"


@dataclass(frozen=True)
class Settings:
    purpleair_api_key: Optional[str]
    purpleair_base_url: str
    request_timeout: float
    margin_degrees: float
    max_age_seconds: int
    min_confidence: int
    max_distance_meters: float
    location_store_path: Optional[str]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_int(name: str, default: int, minimum: int = 0) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        purpleair_api_key=_read_optional_env(_API_KEY_ENV, None),
        purpleair_base_url=_read_str_env(_BASE_URL_ENV, DEFAULT_BASE_URL).rstrip("/"),
        request_timeout=_read_positive_float(_TIMEOUT_ENV, 30.0),
        margin_degrees=_read_positive_float(_MARGIN_ENV, 1.0),
        max_age_seconds=_read_int(_MAX_AGE_ENV, 20 * 60),
        min_confidence=_read_int(_MIN_CONFIDENCE_ENV, 70),
        max_distance_meters=_read_positive_float(_MAX_DISTANCE_ENV, 10_000.0),
        location_store_path=_read_optional_env(
            _LOCATION_STORE_ENV, "./tmp/last_location.json"
        ),
        log_level=_read_log_level("INFO"),
    )
