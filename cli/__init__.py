"""Command-line client for the local AQI estimator service; the Typer app is ``cli.app.app``."""
