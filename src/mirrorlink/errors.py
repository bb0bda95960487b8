"""Error taxonomy for agent connection and CLI failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class CliError(Exception):
    """Base for user-facing errors with a machine-readable code and a hint."""

    fatal: bool = True

    def __init__(self, message: str, *, code: str, help: str = "") -> None:  # noqa: A002
        super().__init__(message)
        self.code = code
        self.help = help


# ── Connection errors ──────────────────────────────────────────────────


class OperatorConnectionFailed(CliError):
    """Raised when operator discovery fails.

    Never escapes ``connect_operator``: the direct path is tried instead.
    """

    fatal = False

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to connect to operator: {cause}",
            code="OPERATOR_CONNECTION_FAILED",
            help="Check that the operator is installed and your user has access to it.",
        )
        self.__cause__ = cause


class KubernetesApiFailed(CliError):
    """Raised when the cluster client cannot be constructed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to initialize the cluster API: {cause}",
            code="CLUSTER_API_INIT_FAILED",
            help="Verify your kubeconfig and that the cluster is reachable.",
        )
        self.__cause__ = cause


class AgentReadyTimeout(CliError):
    """Raised when the agent workload is not created within the startup timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(
            f"Agent was not ready within {timeout:g}s",
            code="AGENT_READY_TIMEOUT",
            help="Increase agent.startup_timeout or check the cluster for pending pods.",
        )
        self.timeout = timeout


class CreateAgentFailed(CliError):
    """Raised when the cluster client reports a failure creating the agent."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to create agent: {cause}",
            code="CREATE_AGENT_FAILED",
            help="Check that you have permissions to create pods and jobs in the namespace.",
        )
        self.__cause__ = cause


class AgentConnectionFailed(CliError):
    """Raised when opening a channel to an already created agent fails."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            f"Failed to connect to the agent: {cause}",
            code="AGENT_CONNECTION_FAILED",
            help="Check that port-forwarding to pods is allowed in the cluster.",
        )
        self.__cause__ = cause


# ── Configuration errors ───────────────────────────────────────────────


class ConfigError(CliError):
    """Raised when configuration cannot be read or validated."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        location = f" ({path})" if path is not None else ""
        super().__init__(
            f"Invalid configuration{location}: {message}",
            code="CONFIG_INVALID",
            help="Run 'mirrorlink config show' to inspect the effective configuration.",
        )
        self.path = path


class BackendLoadError(CliError):
    """Raised when a configured collaborator import string cannot be resolved."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(
            f"Cannot load backend {target!r}: {reason}",
            code="BACKEND_LOAD_FAILED",
            help="Backends are configured as 'package.module:attribute' under [backends].",
        )
        self.target = target


class ConnectInfoDecodeError(CliError):
    """Raised when a serialized agent descriptor is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Malformed agent connect info: {reason}",
            code="CONNECT_INFO_INVALID",
        )


__all__ = [
    "AgentConnectionFailed",
    "AgentReadyTimeout",
    "BackendLoadError",
    "CliError",
    "ConfigError",
    "ConnectInfoDecodeError",
    "CreateAgentFailed",
    "KubernetesApiFailed",
    "OperatorConnectionFailed",
]
