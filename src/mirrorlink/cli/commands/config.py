"""Configuration inspection commands."""

from __future__ import annotations

from pathlib import Path

import click

from mirrorlink.config import LayerConfig
from mirrorlink.errors import CliError
from mirrorlink.paths import get_config_path

from .errors import report_cli_error


@click.group()
def config() -> None:
    """Inspect mirrorlink configuration."""


@config.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to read (defaults to the user config file).",
)
def show(config_path: Path | None) -> None:
    """Print the effective configuration, including environment overrides."""
    try:
        layer_config = LayerConfig.load(config_path)
    except CliError as exc:
        report_cli_error(exc)
    click.echo(layer_config.to_toml(), nl=False)


@config.command()
def path() -> None:
    """Print the location of the user config file."""
    click.echo(str(get_config_path()))
