"""CLI entry point for mirrorlink."""

from __future__ import annotations

from mirrorlink.cli import cli


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
