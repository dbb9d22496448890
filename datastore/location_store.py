from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from settings import get_settings

logger = logging.getLogger(__name__)


class StoredLocation(BaseModel):
    """Last known user position, with an optional place label."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    label: Optional[str] = None


class LocationStore:
    """Single-slot JSON store for the last location the user asked about."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        self._location: Optional[StoredLocation] = None
        self._lock = Lock()
        if path:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def get(self) -> Optional[StoredLocation]:
        with self._lock:
            if self._location is None:
                return None
            return self._location.model_copy()

    def put(self, location: StoredLocation) -> None:
        with self._lock:
            self._location = location.model_copy()
            self._persist()

    def clear(self) -> None:
        with self._lock:
            self._location = None
            if self.path and self.path.exists():
                self.path.unlink()

    def _persist(self) -> None:
        if not self.path or self._location is None:
            return
        self.path.write_text(json.dumps(self._location.model_dump(mode="json"), indent=2))

    def _load_from_disk(self) -> None:
        if not self.path or not self.path.exists():
            return

        try:
            raw = self.path.read_text() or "null"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable location store", extra={"reason": str(self.path)})
            return
        if data is None:
            return

        try:
            self._location = StoredLocation.model_validate(data)
        except ValidationError:
            logger.warning("Ignoring invalid stored location", extra={"reason": str(self.path)})


@lru_cache
def build_default_store(path: Optional[str] = None) -> LocationStore:
    settings = get_settings()
    store_path = settings.location_store_path if path is None else path
    return LocationStore(path=Path(store_path) if store_path else None)
