"""CLI commands for managing approxidate settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from approxidate.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)
from approxidate.errors import ApproxidateError, handle_error


config_app = typer.Typer(help="Manage approxidate configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    date_format: Optional[str] = typer.Option(None, "--format", help="Default output format"),
    timezone: Optional[str] = typer.Option(None, help="Time zone for local time, e.g. Europe/Berlin"),
    window_days: Optional[int] = typer.Option(None, help="Disambiguation window in days"),
) -> None:
    """Initialize the approxidate settings file."""

    overrides = {}
    if date_format:
        overrides.setdefault("dates", {})["date_format"] = date_format
    if timezone:
        overrides.setdefault("dates", {})["timezone"] = timezone
    if window_days is not None:
        overrides.setdefault("dates", {})["disambiguation_window_days"] = window_days

    try:
        settings = bootstrap_settings(path=config_path, overrides=overrides)
    except ApproxidateError as e:
        typer.echo(handle_error(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display the effective configuration."""

    try:
        settings = load_settings(config_path)
    except FileNotFoundError:
        typer.echo(f"❌ No configuration at {config_path}, run: approxidate config init", err=True)
        raise typer.Exit(code=1)
    except ApproxidateError as e:
        typer.echo(handle_error(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(_summarize_settings(settings))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. dates.date_format"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Update a configuration value."""

    try:
        settings = load_settings(config_path)
    except FileNotFoundError:
        typer.echo(f"❌ No configuration at {config_path}, run: approxidate config init", err=True)
        raise typer.Exit(code=1)
    except ApproxidateError as e:
        typer.echo(handle_error(e), err=True)
        raise typer.Exit(code=1)
    payload = settings.model_dump(mode="python")
    _assign(payload, key.split("."), value)
    try:
        updated = Settings.model_validate(payload)
    except ValueError as e:
        typer.echo(f"❌ Invalid value for {key}: {e}", err=True)
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
        typer.echo(f"✅ Configuration valid at {config_path}")
        typer.echo(f"   Format: {settings.dates.date_format.value}")
        typer.echo(f"   Time zone: {settings.dates.timezone or 'local'}")
        typer.echo(f"   Window: {settings.dates.disambiguation_window_days} days")
    except (FileNotFoundError, ApproxidateError) as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        raise typer.Exit(code=1)


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _assign(payload: dict, keys: list[str], value: str) -> None:
    current = payload
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value
