from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import typer

_CATEGORY_COLORS = {
    "Good": typer.colors.GREEN,
    "Moderate": typer.colors.YELLOW,
    "Unhealthy for Sensitive Groups": typer.colors.BRIGHT_YELLOW,
    "Unhealthy": typer.colors.RED,
    "Very Unhealthy": typer.colors.MAGENTA,
    "Hazardous": typer.colors.BRIGHT_MAGENTA,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        if value is None:
            continue
        typer.echo(f"{key}: {value}")


def _format_km(meters: Optional[float]) -> str:
    if meters is None:
        return "?"
    return f"{meters / 1000:g}"


def render_estimate(payload: Dict[str, Any], label: Optional[str] = None) -> None:
    echo_heading(f"Air Quality{f' near {label}' if label else ''}")
    status = payload.get("status")

    if status == "awaiting_location":
        typer.echo("No location available.")
        return
    if status == "no_data":
        typer.echo(
            f"No data found within {_format_km(payload.get('max_distance_meters'))} km"
        )
        return
    if status == "out_of_range":
        typer.secho("AQI unavailable (concentration beyond the AQI scale).", fg=typer.colors.RED)
    else:
        category = payload.get("category")
        typer.secho(
            f"AQI {payload.get('aqi')} ({category})",
            fg=_CATEGORY_COLORS.get(category),
            bold=True,
        )

    pm25 = payload.get("pm25")
    nearest = payload.get("nearest_sensor_meters")
    echo_key_values(
        [
            ("pm2.5", f"{pm25:.1f} µg/m³" if pm25 is not None else None),
            ("sensors", payload.get("sensor_count")),
            ("nearest_sensor", f"{_format_km(nearest)} km" if nearest is not None else None),
        ]
    )
