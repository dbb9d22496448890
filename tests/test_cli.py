from __future__ import annotations

from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from cli.app import app
from datastore.location_store import LocationStore, StoredLocation


class StubClient:
    def __init__(self, config, payload: Dict[str, Any] | None = None) -> None:
        self.config = config
        self.payload: Dict[str, Any] = payload or {
            "status": "ok",
            "latitude": 47.6,
            "longitude": -122.3,
            "pm25": 7.99,
            "aqi": 33,
            "category": "Good",
            "sensor_count": 3,
            "nearest_sensor_meters": 1250.0,
            "max_distance_meters": 10000.0,
        }
        self.calls: List[tuple[float, float]] = []
        self.closed = False

    def get_estimate(self, latitude: float, longitude: float) -> Dict[str, Any]:
        self.calls.append((latitude, longitude))
        return self.payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def store(tmp_path, monkeypatch) -> LocationStore:
    location_store = LocationStore(path=tmp_path / "location.json")
    monkeypatch.setattr("cli.app.build_default_store", lambda: location_store)
    return location_store


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_estimate_with_coordinates_renders_and_remembers(
    monkeypatch, runner: CliRunner, store: LocationStore
) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(
        app, ["estimate", "--lat", "47.6", "--lon", "-122.3", "--label", "Seattle"]
    )

    assert result.exit_code == 0
    assert "Air Quality near Seattle" in result.stdout
    assert "AQI 33 (Good)" in result.stdout
    assert "sensors: 3" in result.stdout
    assert stub.calls == [(47.6, -122.3)]
    assert stub.closed is True
    assert store.get() == StoredLocation(latitude=47.6, longitude=-122.3, label="Seattle")


def test_estimate_uses_stored_location(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    store.put(StoredLocation(latitude=10.0, longitude=20.0))
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["estimate"])

    assert result.exit_code == 0
    assert stub.calls == [(10.0, 20.0)]


def test_estimate_without_any_location(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["estimate"])

    assert result.exit_code == 0
    assert "No location available" in result.stdout
    assert stub.calls == []


def test_estimate_renders_no_data(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    stub = StubClient(
        config=None, payload={"status": "no_data", "max_distance_meters": 10000.0}
    )
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["estimate", "--lat", "1", "--lon", "2"])

    assert result.exit_code == 0
    assert "No data found within 10 km" in result.stdout


def test_estimate_renders_out_of_range(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    stub = StubClient(
        config=None,
        payload={"status": "out_of_range", "pm25": 612.0, "aqi": None, "sensor_count": 1},
    )
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["estimate", "--lat", "1", "--lon", "2"])

    assert result.exit_code == 0
    assert "AQI unavailable" in result.stdout
    assert "AQI None" not in result.stdout


def test_estimate_requires_both_coordinates(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["estimate", "--lat", "1"])

    assert result.exit_code != 0
    assert stub.calls == []


def test_forget_clears_stored_location(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    store.put(StoredLocation(latitude=10.0, longitude=20.0))
    _install_stub(monkeypatch, StubClient(config=None))

    result = runner.invoke(app, ["forget"])

    assert result.exit_code == 0
    assert store.get() is None
    assert not store.path.exists()


def test_base_url_option_reaches_client(monkeypatch, runner: CliRunner, store: LocationStore) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://aqi.local:9000/", "estimate"])

    assert result.exit_code == 0
    assert stub.config.base_url == "http://aqi.local:9000"
