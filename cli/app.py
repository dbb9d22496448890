from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_estimate
from datastore.location_store import LocationStore, StoredLocation, build_default_store


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient
    store: LocationStore


app = typer.Typer(
    help="Check the local PM2.5 air quality index through the estimator service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Estimator API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Maximum seconds to wait for the estimate.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client, store=build_default_store())
    ctx.call_on_close(client.close)


@app.command("estimate")
def estimate_command(
    ctx: typer.Context,
    latitude: Optional[float] = typer.Option(
        None, "--latitude", "--lat", min=-90, max=90, help="Latitude in decimal degrees."
    ),
    longitude: Optional[float] = typer.Option(
        None, "--longitude", "--lon", min=-180, max=180, help="Longitude in decimal degrees."
    ),
    label: Optional[str] = typer.Option(
        None, "--label", help="Place name remembered with the location."
    ),
) -> None:
    """Estimate the AQI at a location, or at the last location used."""
    state = _get_state(ctx)
    if (latitude is None) != (longitude is None):
        raise typer.BadParameter("Provide both --latitude and --longitude, or neither.")

    if latitude is not None and longitude is not None:
        location = StoredLocation(latitude=latitude, longitude=longitude, label=label)
        state.store.put(location)
    else:
        location = state.store.get()

    if location is None:
        # Nothing to query yet; this is a valid state, not a failure.
        render_estimate({"status": "awaiting_location"})
        return

    payload = state.client.get_estimate(location.latitude, location.longitude)
    render_estimate(payload, label=location.label)


@app.command("forget")
def forget_command(ctx: typer.Context) -> None:
    """Remove the remembered location."""
    state = _get_state(ctx)
    state.store.clear()
    typer.echo("Stored location cleared.")
