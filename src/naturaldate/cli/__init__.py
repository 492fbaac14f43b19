"""Command line entry points for naturaldate."""

from typer import Typer

from .parse import parse_command
from ..configuration.cli import config_app


cli = Typer(help="naturaldate command line tools")
cli.command("parse")(parse_command)
cli.add_typer(config_app, name="config")

__all__ = ["cli", "config_app", "parse_command"]
