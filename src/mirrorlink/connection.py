"""Agent connection: reach an agent through the operator or provision one directly.

The orchestrator tries the operator first (when enabled) and falls back to
creating an agent workload through the cluster client. Whichever path
succeeds determines the returned ``AgentConnectInfo``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from mirrorlink.backends import Backends
from mirrorlink.channels import AgentConnection
from mirrorlink.errors import (
    AgentConnectionFailed,
    AgentReadyTimeout,
    ConnectInfoDecodeError,
    CreateAgentFailed,
    KubernetesApiFailed,
    OperatorConnectionFailed,
)

if TYPE_CHECKING:
    from mirrorlink.channels import ChannelPair
    from mirrorlink.config import LayerConfig
    from mirrorlink.ports import ClusterClient
    from mirrorlink.progress import Progress

logger = logging.getLogger(__name__)

CONNECT_INFO_ENV = "MIRRORLINK_AGENT_CONNECT_INFO"

_abandoned_tasks: set[asyncio.Task[DirectKubernetesConnectInfo]] = set()


class OperatorConnectInfo(BaseModel):
    """Agent reached through the operator, which owns its lifecycle."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"


class DirectKubernetesConnectInfo(BaseModel):
    """Agent provisioned directly; reachable by workload name and control port."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["direct_kubernetes"] = "direct_kubernetes"
    name: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)


AgentConnectInfo = Annotated[
    OperatorConnectInfo | DirectKubernetesConnectInfo,
    Field(discriminator="kind"),
]

_connect_info_adapter: TypeAdapter[AgentConnectInfo] = TypeAdapter(AgentConnectInfo)


def encode_connect_info(info: AgentConnectInfo) -> str:
    """Serialize a connect descriptor to JSON."""
    return _connect_info_adapter.dump_json(info).decode("utf-8")


def decode_connect_info(raw: str | bytes) -> AgentConnectInfo:
    """Parse a connect descriptor produced by ``encode_connect_info``."""
    try:
        return _connect_info_adapter.validate_json(raw)
    except ValidationError as exc:
        raise ConnectInfoDecodeError(str(exc)) from exc


def _startup_deadline(config: LayerConfig) -> float:
    """Seconds the direct path may spend creating the agent workload."""
    return float(config.agent.startup_timeout)


async def connect_operator(
    config: LayerConfig,
    progress: Progress,
    *,
    backends: Backends | None = None,
) -> ChannelPair | None:
    """Try to bind to an agent through the operator.

    Returns ``None`` when no operator is deployed or discovery fails; the
    failure is logged and never raised so the caller can fall back.
    """
    backends = backends or Backends.from_config(config)
    sub_progress = progress.subtask("Checking Operator")

    try:
        connection = await backends.operator_discovery(config)
    except Exception as exc:  # quality-allow-broad-except
        err = OperatorConnectionFailed(exc)
        sub_progress.fail_with("Unable to connect to Operator")
        logger.warning("%s", err)
        return None

    if connection is None:
        sub_progress.done_with("No Operator Detected")
        return None

    sub_progress.done_with("Connected to Operator")
    return connection


async def provision_direct(
    config: LayerConfig,
    progress: Progress,
    *,
    backends: Backends | None = None,
) -> tuple[DirectKubernetesConnectInfo, AgentConnection]:
    """Create an agent workload through the cluster client and connect to it.

    Raises:
        KubernetesApiFailed: The cluster client could not be constructed.
        AgentReadyTimeout: Creation did not finish within ``agent.startup_timeout``.
        CreateAgentFailed: The cluster client failed to create the agent.
        AgentConnectionFailed: The channel to the created agent could not be opened.
    """
    backends = backends or Backends.from_config(config)

    try:
        cluster = await backends.cluster_factory(config)
    except Exception as exc:  # quality-allow-broad-except
        raise KubernetesApiFailed(exc) from exc

    timeout = _startup_deadline(config)
    info = await _create_within_deadline(cluster, progress, timeout)
    logger.info("Agent %s created, control port %d", info.name, info.port)

    try:
        pair = await cluster.create_connection((info.name, info.port))
    except Exception as exc:  # quality-allow-broad-except
        raise AgentConnectionFailed(exc) from exc

    return info, AgentConnection.from_pair(pair)


async def _create_within_deadline(
    cluster: ClusterClient, progress: Progress, timeout: float
) -> DirectKubernetesConnectInfo:
    """Race agent creation against the startup deadline.

    On expiry the creation task is cancelled and abandoned; its outcome is
    never awaited, and the timeout is raised at once.
    """
    task = asyncio.create_task(_create_agent(cluster, progress))
    try:
        done, _pending = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return task.result()

    task.cancel()
    _abandoned_tasks.add(task)
    task.add_done_callback(_discard_abandoned)
    raise AgentReadyTimeout(timeout)


def _discard_abandoned(task: asyncio.Task[DirectKubernetesConnectInfo]) -> None:
    _abandoned_tasks.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned agent creation finished with: %s", exc)
    else:
        logger.debug("Abandoned agent creation completed after the deadline")


async def _create_agent(
    cluster: ClusterClient, progress: Progress
) -> DirectKubernetesConnectInfo:
    # Failures surface as CreateAgentFailed, including a TimeoutError raised
    # by the client itself and a workload descriptor that fails validation.
    try:
        name, port = await cluster.create_agent(progress)
        return DirectKubernetesConnectInfo(name=name, port=port)
    except Exception as exc:  # quality-allow-broad-except
        raise CreateAgentFailed(exc) from exc


async def create_and_connect(
    config: LayerConfig,
    progress: Progress,
    *,
    backends: Backends | None = None,
) -> tuple[AgentConnectInfo, AgentConnection]:
    """Reach exactly one agent and return how it was reached plus its channels.

    1. When ``config.operator`` is set, ask the operator for a connection.
    2. Otherwise, or when the operator yields nothing, provision an agent
       directly in the cluster.
    """
    backends = backends or Backends.from_config(config)

    if config.operator:
        pair = await connect_operator(config, progress, backends=backends)
        if pair is not None:
            logger.info("Using agent managed by the operator")
            return OperatorConnectInfo(), AgentConnection.from_pair(pair)
        logger.info("Operator unavailable, provisioning agent directly")
    else:
        logger.debug("Operator disabled, provisioning agent directly")

    return await provision_direct(config, progress, backends=backends)


establish = create_and_connect


__all__ = [
    "CONNECT_INFO_ENV",
    "AgentConnectInfo",
    "DirectKubernetesConnectInfo",
    "OperatorConnectInfo",
    "connect_operator",
    "create_and_connect",
    "decode_connect_info",
    "encode_connect_info",
    "establish",
    "provision_direct",
]
