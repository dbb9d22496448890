"""Decoding of the column-oriented sensor table returned by PurpleAir."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence

from models.records import Coordinate, SensorReading
from services.purpleair import SensorDecodeError

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("sensor_index", "latitude", "longitude", "confidence", "pm2.5_cf_1")


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def decode_sensor_table(payload: Mapping[str, Any]) -> List[SensorReading]:
    """Turn ``{"fields": [...], "data": [[...], ...]}`` into sensor readings.

    Column positions come from this response's own ``fields`` list, since
    the layout follows whichever fields were requested. A structurally
    malformed payload raises ``SensorDecodeError``; individual rows whose
    required cells are empty, non-numeric or non-finite are skipped.
    """
    fields = payload.get("fields")
    rows = payload.get("data")
    if not isinstance(fields, list) or not isinstance(rows, list):
        raise SensorDecodeError("Sensor response is missing the 'fields' or 'data' array.")

    index: Dict[str, int] = {str(name): position for position, name in enumerate(fields)}
    missing = [name for name in _REQUIRED_FIELDS if name not in index]
    if missing:
        raise SensorDecodeError(
            f"Sensor response missing required fields: {', '.join(missing)}"
        )

    def cell(row: Sequence[Any], name: str) -> Any:
        position = index.get(name)
        return None if position is None else row[position]

    readings: List[SensorReading] = []
    skipped = 0
    for row_number, row in enumerate(rows, start=1):
        if not isinstance(row, list) or len(row) != len(fields):
            raise SensorDecodeError(f"Row {row_number} does not match the field list.")

        required = {name: _to_float(cell(row, name)) for name in _REQUIRED_FIELDS}
        if any(value is None for value in required.values()):
            skipped += 1
            continue

        sensor_index = int(required["sensor_index"])
        name = cell(row, "name")
        readings.append(
            SensorReading(
                sensor_index=sensor_index,
                name=str(name) if name is not None else str(sensor_index),
                coordinate=Coordinate(
                    latitude=required["latitude"],
                    longitude=required["longitude"],
                ),
                confidence=required["confidence"],
                pm25_cf_1=required["pm2.5_cf_1"],
                humidity=_to_float(cell(row, "humidity")),
                pm25_10minute=_to_float(cell(row, "pm2.5_10minute")),
            )
        )

    if skipped:
        logger.debug(
            "Skipped sensor rows with incomplete values",
            extra={"sensor_count": len(rows), "kept_count": len(readings)},
        )
    return readings
