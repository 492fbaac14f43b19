"""Typed settings management for naturaldate.

This module wraps user configuration in Pydantic models so the CLI can rely
on validated parser defaults. Settings live in a JSON file and individual
values can be overridden from the environment.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from naturaldate.errors import InvalidConfigError
from naturaldate.types import Direction, ParseOptions


DEFAULT_CONFIG_PATH = Path.home() / ".naturaldate" / "config.json"


class ParserSettings(BaseModel):
    """Defaults applied to every parse call."""

    direction: Direction = Field(
        default=Direction.PAST,
        description="Direction for expressions without next/last/ago/from now",
    )


class Settings(BaseModel):
    """Root configuration state."""

    parser: ParserSettings = Field(default_factory=ParserSettings)

    def parse_options(self) -> ParseOptions:
        return ParseOptions(direction=self.parser.direction)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if invalid."""

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise InvalidConfigError(
            f"Invalid configuration: {exc}",
            details={"path": str(path)},
        ) from exc


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Create or load settings respecting environment overrides."""

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()
        save_settings(settings, path)

    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides)
    merged = _apply_env_overrides(merged)

    resolved = _validate(merged)
    save_settings(resolved, path)
    return resolved


def effective_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Settings stored at ``path`` (defaults when missing) plus environment overrides.

    Unlike :func:`bootstrap_settings` nothing is written to disk.
    """

    settings = load_settings(path) if path.exists() else Settings()
    merged = _apply_env_overrides(settings.model_dump(mode="python"))
    return _validate(merged)


def _validate(payload: Dict[str, Any]) -> Settings:
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    parser = data.setdefault("parser", {})
    _set_env_override(parser, "direction", "NATURALDATE_DIRECTION")
    return data


def _set_env_override(mapping: Dict[str, Any], key: str, env_name: str) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    mapping[key] = raw.strip().lower()
