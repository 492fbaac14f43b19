"""CLI commands for managing naturaldate settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from naturaldate.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)
from naturaldate.errors import InvalidConfigError
from naturaldate.errors.user_messages import format_error_for_cli
from naturaldate.types import Direction


config_app = typer.Typer(help="Manage naturaldate configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
    direction: Optional[Direction] = typer.Option(None, help="Default parse direction"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Initialize the naturaldate settings file."""

    if force and config_path.exists():
        config_path.unlink()

    overrides = {}
    if direction:
        overrides.setdefault("parser", {})["direction"] = direction.value

    try:
        settings = bootstrap_settings(path=config_path, overrides=overrides)
    except InvalidConfigError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config"),
) -> None:
    """Display the stored configuration."""

    settings = _load_or_exit(config_path)
    typer.echo(_summarize_settings(settings))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. parser.direction"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config"),
) -> None:
    """Update a configuration value."""

    settings = _load_or_exit(config_path)
    payload = settings.model_dump(mode="python")
    _assign(payload, key.split("."), value)
    try:
        updated = Settings.model_validate(payload)
    except ValueError as exc:
        typer.echo(f"Invalid value for {key}: {exc}", err=True)
        raise typer.Exit(code=1)
    save_settings(updated, config_path)
    typer.echo(f"Updated {key}")


def _load_or_exit(config_path: Path) -> Settings:
    try:
        return load_settings(config_path)
    except FileNotFoundError:
        typer.echo(f"No configuration at {config_path}. Run: naturaldate config init", err=True)
        raise typer.Exit(code=1)
    except InvalidConfigError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _assign(payload: dict, keys: list[str], value: str) -> None:
    current = payload
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value
