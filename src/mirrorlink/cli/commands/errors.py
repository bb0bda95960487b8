"""Rendering of user-facing errors for CLI commands."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from mirrorlink.errors import CliError


def report_cli_error(error: CliError) -> NoReturn:
    """Print *error* and its hint to stderr, then exit with status 1."""
    click.secho(f"Error: {error}", fg="red", bold=True, err=True)
    if error.help:
        click.echo(f"  {click.style('Hint:', fg='cyan')} {error.help}", err=True)
    sys.exit(1)
