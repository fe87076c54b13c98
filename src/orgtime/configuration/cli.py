"""CLI commands for managing orgtime settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from orgtime.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)
from orgtime.errors import ConfigurationError, format_error_for_cli


config_app = typer.Typer(help="Manage orgtime configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    week_start_day: Optional[int] = typer.Option(None, help="ISO weekday weeks start on (1 = Monday)"),
    week_end_day: Optional[int] = typer.Option(None, help="ISO weekday weeks end on (7 = Sunday)"),
    deadline_warning_days: Optional[int] = typer.Option(None, help="Default deadline warning window"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file with defaults"),
) -> None:
    """Initialize the orgtime settings file."""

    if force and config_path.exists():
        save_settings(Settings(), config_path)

    timestamps = {}
    if week_start_day is not None:
        timestamps["week_start_day"] = week_start_day
    if week_end_day is not None:
        timestamps["week_end_day"] = week_end_day
    if deadline_warning_days is not None:
        timestamps["deadline_warning_days"] = deadline_warning_days
    overrides = {"timestamps": timestamps} if timestamps else {}

    try:
        settings = bootstrap_settings(path=config_path, overrides=overrides)
    except ConfigurationError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display the stored configuration."""

    try:
        settings = load_settings(config_path)
    except ConfigurationError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(_summarize_settings(settings))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. timestamps.week_start_day"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Update a configuration value."""

    try:
        settings = load_settings(config_path)
    except ConfigurationError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    payload = settings.model_dump(mode="python")
    _assign(payload, key.split("."), value)
    try:
        updated = Settings.model_validate(payload)
    except ValueError as exc:
        typer.echo(f"❌ Invalid value for {key}: {exc}", err=True)
        raise typer.Exit(code=1)
    save_settings(updated, config_path)
    typer.echo(f"Updated {key}")


@config_app.command("validate")
def validate_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Validate configuration file for correctness."""

    try:
        settings = load_settings(config_path)
    except ConfigurationError as exc:
        typer.echo(f"❌ Configuration invalid: {exc}", err=True)
        raise typer.Exit(code=1)
    timestamps = settings.timestamps
    typer.echo(f"✅ Configuration valid at {config_path}")
    typer.echo(f"   Week starts on: {timestamps.week_start_day}")
    typer.echo(f"   Week ends on: {timestamps.week_end_day}")
    typer.echo(f"   Deadline warning days: {timestamps.deadline_warning_days}")


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _assign(payload: dict, keys: list[str], value: str) -> None:
    current = payload
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value
