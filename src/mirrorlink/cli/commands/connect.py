"""Agent connection command."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click

from mirrorlink.config import LayerConfig
from mirrorlink.connection import (
    CONNECT_INFO_ENV,
    AgentConnectInfo,
    DirectKubernetesConnectInfo,
    OperatorConnectInfo,
    create_and_connect,
    encode_connect_info,
)
from mirrorlink.errors import CliError
from mirrorlink.progress import ConsoleProgress, NoProgress

from .errors import report_cli_error

logger = logging.getLogger(__name__)


async def _connect(layer_config: LayerConfig, *, quiet: bool) -> AgentConnectInfo:
    if quiet:
        info, _connection = await create_and_connect(layer_config, NoProgress())
        return info

    progress = ConsoleProgress("Connecting to agent")
    try:
        info, connection = await create_and_connect(layer_config, progress)
    except CliError:
        progress.fail()
        raise
    progress.done()
    logger.debug(
        "Agent channels ready (outbound capacity=%d, inbound capacity=%d)",
        connection.sender.maxsize,
        connection.receiver.maxsize,
    )
    return info


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to read (defaults to the user config file).",
)
@click.option(
    "--no-operator",
    is_flag=True,
    help="Skip the operator and provision the agent directly.",
)
@click.option(
    "--startup-timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Override agent.startup_timeout (seconds).",
)
@click.option("--env", "as_env", is_flag=True, help=f"Print as {CONNECT_INFO_ENV}=<json>.")
@click.option("--quiet", is_flag=True, help="Do not print progress.")
def connect(
    config_path: Path | None,
    no_operator: bool,
    startup_timeout: int | None,
    as_env: bool,
    quiet: bool,
) -> None:
    """Reach an agent and print how it was reached."""
    try:
        layer_config = LayerConfig.load(config_path).with_overrides(
            operator=False if no_operator else None,
            startup_timeout=startup_timeout,
        )
        info = asyncio.run(_connect(layer_config, quiet=quiet))
    except CliError as exc:
        report_cli_error(exc)

    if not quiet:
        match info:
            case OperatorConnectInfo():
                click.secho("Agent reached through the operator.", fg="green", err=True)
            case DirectKubernetesConnectInfo(name=name, port=port):
                click.secho(f"Agent {name} listening on port {port}.", fg="green", err=True)

    payload = encode_connect_info(info)
    click.echo(f"{CONNECT_INFO_ENV}={payload}" if as_env else payload)
