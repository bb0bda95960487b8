"""Hierarchical progress reporting used as an observability side channel."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import click

_INDENT = "  "


@runtime_checkable
class Progress(Protocol):
    """Status sink that supports labeled subtasks and terminal annotations."""

    def subtask(self, label: str) -> Progress:
        """Start a child task labeled *label*."""
        ...

    def done_with(self, label: str) -> None:
        """Mark this task finished successfully with a final message."""
        ...

    def fail_with(self, label: str) -> None:
        """Mark this task failed with a final message."""
        ...


class NoProgress:
    """Progress sink that reports nothing."""

    def subtask(self, label: str) -> NoProgress:
        del label
        return self

    def done_with(self, label: str) -> None:
        del label

    def fail_with(self, label: str) -> None:
        del label


class ConsoleProgress:
    """Progress rendered as indented lines on stderr.

    A task prints its label when created and one terminal line when it
    finishes. Only the first terminal annotation is shown.
    """

    def __init__(self, label: str = "", *, depth: int = 0, err: bool = True) -> None:
        self.label = label
        self._depth = depth
        self._err = err
        self._finished = False
        if label:
            self._echo(f"{label}...", fg=None)

    @property
    def finished(self) -> bool:
        return self._finished

    def subtask(self, label: str) -> ConsoleProgress:
        child_depth = self._depth + 1 if self.label else self._depth
        return ConsoleProgress(label, depth=child_depth, err=self._err)

    def done_with(self, label: str) -> None:
        self._finish(f"✓ {label}", fg="green")

    def fail_with(self, label: str) -> None:
        self._finish(f"✗ {label}", fg="red")

    def done(self) -> None:
        self.done_with(self.label)

    def fail(self) -> None:
        self.fail_with(self.label)

    def _finish(self, message: str, *, fg: str) -> None:
        if self._finished:
            return
        self._finished = True
        self._echo(message, fg=fg)

    def _echo(self, message: str, *, fg: str | None) -> None:
        click.secho(f"{_INDENT * self._depth}{message}", fg=fg, err=self._err)


__all__ = ["ConsoleProgress", "NoProgress", "Progress"]
