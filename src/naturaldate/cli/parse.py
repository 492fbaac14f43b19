"""``naturaldate parse``: resolve one expression from the command line.

Examples:
    naturaldate parse "next friday at 9am"
    naturaldate parse "monday" --direction future --reference 2019-11-25T13:07:18+00:00
    naturaldate parse "5 minutes ago" --json
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from naturaldate.configuration.settings import DEFAULT_CONFIG_PATH, effective_settings
from naturaldate.errors import InvalidConfigError, ParseError
from naturaldate.errors.user_messages import format_error_for_cli
from naturaldate.parser import NaturalDateParser
from naturaldate.types import Direction, ParseOptions

logger = logging.getLogger(__name__)


def parse_command(
    text: str = typer.Argument(..., help="Text containing a date or time expression"),
    reference: Optional[str] = typer.Option(
        None, help="Reference instant in ISO 8601 (defaults to the current local time)"
    ),
    direction: Optional[Direction] = typer.Option(
        None, help="Direction for bare expressions (overrides the config file)"
    ),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
    output_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
    verbose: bool = typer.Option(False, "--verbose", help="Log matching and resolution steps"),
) -> None:
    """Resolve the first date/time expression found in TEXT."""

    if verbose:
        _enable_debug_logging()

    anchor = _reference_instant(reference)
    try:
        options = effective_settings(config_path).parse_options()
    except InvalidConfigError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    if direction is not None:
        options = ParseOptions(direction=direction)

    try:
        value, expr_type = NaturalDateParser(options).parse(text, anchor)
    except ParseError as exc:
        logger.debug(f"Parse failed: {exc}")
        if output_json:
            typer.echo(json.dumps(exc.to_dict(), indent=2), err=True)
        else:
            typer.echo(str(exc), err=True)
            typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)

    if output_json:
        payload = {
            "text": text,
            "reference": anchor.isoformat(),
            "direction": options.direction.value,
            "value": value.isoformat(),
            "type": expr_type.labels,
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(f"{value.isoformat()} ({' + '.join(expr_type.labels)})")


def _reference_instant(raw: Optional[str]) -> datetime:
    if raw is None:
        return datetime.now().astimezone()
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Not an ISO 8601 timestamp: {raw}", param_hint="--reference")


def _enable_debug_logging() -> None:
    package_logger = logging.getLogger("naturaldate")
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
