"""Logging setup for the mirrorlink CLI.

Routes records from Python's logging module to stderr through click so
they interleave cleanly with progress output.
"""

from __future__ import annotations

import logging

import click

_LEVEL_COLORS = {
    "DEBUG": "bright_black",
    "INFO": "cyan",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


class ClickEchoHandler(logging.Handler):
    """Logging handler that writes formatted records to stderr via click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            level = click.style(record.levelname, fg=_LEVEL_COLORS.get(record.levelname))
            click.echo(f"{level} {msg}", err=True)
        except Exception:
            self.handleError(record)


_logging_initialized: bool = False


def setup_logging(level: int | str = logging.WARNING) -> None:
    """Install the click handler on the root logger.

    Idempotent: later calls only adjust the level.
    """
    global _logging_initialized

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if _logging_initialized:
        return

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    _logging_initialized = True


__all__ = ["ClickEchoHandler", "setup_logging"]
