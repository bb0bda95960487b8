"""Root CLI command registration."""

from __future__ import annotations

import click

from mirrorlink import __version__
from mirrorlink.log import setup_logging

from .config import config
from .connect import connect

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level of log records written to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, log_level: str) -> None:
    """Connect to a traffic-mirroring agent via the operator or the cluster."""
    if version:
        click.echo(f"mirrorlink {__version__}")
        ctx.exit(0)

    setup_logging(log_level.upper())

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(connect)
cli.add_command(config)
