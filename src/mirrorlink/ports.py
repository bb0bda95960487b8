"""Collaborator ports consumed by the connection core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mirrorlink.channels import ChannelPair
    from mirrorlink.config import LayerConfig
    from mirrorlink.progress import Progress


@runtime_checkable
class ClusterClient(Protocol):
    """Port for cluster operations that create and reach agent workloads."""

    async def create_agent(self, progress: Progress) -> tuple[str, int]:
        """Create an agent workload and return its ``(name, port)``."""
        ...

    async def create_connection(self, target: tuple[str, int]) -> ChannelPair:
        """Open a duplex channel to the workload identified by ``(name, port)``."""
        ...


class ClusterClientFactory(Protocol):
    """Builds a cluster client from configuration."""

    async def __call__(self, config: LayerConfig) -> ClusterClient: ...


class OperatorDiscovery(Protocol):
    """Discovers a managed operator and binds to an agent through it.

    Returns ``None`` when no operator is deployed; raises on failure.
    """

    async def __call__(self, config: LayerConfig) -> ChannelPair | None: ...


__all__ = ["ClusterClient", "ClusterClientFactory", "OperatorDiscovery"]
