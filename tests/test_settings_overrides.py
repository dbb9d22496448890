from __future__ import annotations

from datastore.location_store import build_default_store
from services.pipeline import build_default_pipeline, shutdown_default_pipeline
from settings import DEFAULT_BASE_URL, get_settings


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    store_path = tmp_path / "last.json"

    monkeypatch.setenv("PURPLEAIR_READ_KEY", "secret")
    monkeypatch.setenv("PURPLEAIR_BASE_URL", "https://sensors.example/v1/")
    monkeypatch.setenv("AQI_MARGIN_DEGREES", "0.25")
    monkeypatch.setenv("AQI_MAX_AGE_SECONDS", "300")
    monkeypatch.setenv("AQI_MIN_CONFIDENCE", "80")
    monkeypatch.setenv("AQI_MAX_DISTANCE_METERS", "5000")
    monkeypatch.setenv("AQI_LOCATION_STORE_PATH", str(store_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    get_settings.cache_clear()
    build_default_store.cache_clear()
    build_default_pipeline.cache_clear()

    try:
        settings = get_settings()
        assert settings.purpleair_api_key == "secret"
        assert settings.purpleair_base_url == "https://sensors.example/v1"
        assert settings.log_level == "DEBUG"

        pipeline = build_default_pipeline()
        assert pipeline.config.margin_degrees == 0.25
        assert pipeline.config.max_age_seconds == 300
        assert pipeline.config.min_confidence == 80
        assert pipeline.config.max_distance_meters == 5000.0

        assert build_default_store().path == store_path
    finally:
        shutdown_default_pipeline()
        build_default_store.cache_clear()
        get_settings.cache_clear()


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.delenv("PURPLEAIR_READ_KEY", raising=False)
    monkeypatch.setenv("PURPLEAIR_BASE_URL", "   ")
    monkeypatch.setenv("PURPLEAIR_TIMEOUT", "soon")
    monkeypatch.setenv("AQI_MARGIN_DEGREES", "-1")
    monkeypatch.setenv("AQI_MAX_AGE_SECONDS", "twenty")
    monkeypatch.setenv("AQI_MIN_CONFIDENCE", "")
    monkeypatch.setenv("AQI_MAX_DISTANCE_METERS", "0")

    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.purpleair_api_key is None
        assert settings.purpleair_base_url == DEFAULT_BASE_URL
        assert settings.request_timeout == 30.0
        assert settings.margin_degrees == 1.0
        assert settings.max_age_seconds == 1200
        assert settings.min_confidence == 70
        assert settings.max_distance_meters == 10_000.0
    finally:
        get_settings.cache_clear()
