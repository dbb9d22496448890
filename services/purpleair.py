"""HTTP client for the PurpleAir sensor query API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from models.records import BoundingBoxQuery

logger = logging.getLogger(__name__)

SENSOR_FIELDS: tuple[str, ...] = (
    "name",
    "sensor_index",
    "latitude",
    "longitude",
    "confidence",
    "humidity",
    "pm2.5_cf_1",
    "pm2.5_10minute",
)


class SensorFetchError(RuntimeError):
    """The sensor network could not be queried."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SensorDecodeError(SensorFetchError):
    """The sensor network answered with a payload we cannot interpret."""


class MissingAPIKeyError(RuntimeError):
    """No PurpleAir read key is configured."""


class PurpleAirClient:
    """Thin wrapper around ``GET /sensors``. One request per call, no retries."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.purpleair.com/v1",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not api_key:
            raise MissingAPIKeyError("A PurpleAir read key is required.")
        self._client = httpx.Client(
            base_url=base_url,
            headers={"X-API-Key": api_key},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch_sensors(
        self, query: BoundingBoxQuery, fields: Sequence[str] = SENSOR_FIELDS
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"fields": ",".join(fields), **query.to_params()}
        try:
            response = self._client.get("/sensors", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("Sensor query rejected", extra={"status_code": status_code})
            raise SensorFetchError(
                f"Sensor query failed with status {status_code}: {_error_detail(exc.response)}",
                status_code=status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Sensor query transport failure", extra={"reason": str(exc)})
            raise SensorFetchError(f"Sensor query failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise SensorDecodeError("Sensor query returned a non-JSON body.") from exc
        if not isinstance(payload, dict):
            raise SensorDecodeError("Sensor query returned an unexpected JSON document.")
        return payload


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or "no detail provided."
    if isinstance(data, dict):
        return str(data.get("description") or data.get("error") or "no detail provided.")
    return "no detail provided."
