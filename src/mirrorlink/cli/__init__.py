"""Command-line interface for mirrorlink."""

from mirrorlink.cli.commands.root import cli

__all__ = ["cli"]
