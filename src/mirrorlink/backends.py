"""Resolution of configured collaborator implementations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import import_module
from typing import TYPE_CHECKING, Any

from mirrorlink.errors import BackendLoadError

if TYPE_CHECKING:
    from mirrorlink.channels import ChannelPair
    from mirrorlink.config import LayerConfig
    from mirrorlink.ports import ClusterClient, ClusterClientFactory, OperatorDiscovery

logger = logging.getLogger(__name__)


def load_object(target: str) -> Any:
    """Import ``package.module:attribute`` and return the attribute."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise BackendLoadError(target, "expected 'package.module:attribute'")
    try:
        obj: Any = import_module(module_name)
    except ImportError as exc:
        raise BackendLoadError(target, str(exc)) from exc
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise BackendLoadError(target, f"no attribute {attr!r}") from exc
    if not callable(obj):
        raise BackendLoadError(target, "object is not callable")
    return obj


async def _no_operator(config: LayerConfig) -> ChannelPair | None:
    del config
    return None


async def _missing_cluster_backend(config: LayerConfig) -> ClusterClient:
    del config
    raise BackendLoadError("backends.cluster", "no cluster backend configured")


def _deferred_cluster_factory(target: str) -> ClusterClientFactory:
    async def _create(config: LayerConfig) -> ClusterClient:
        factory = load_object(target)
        return await factory(config)

    return _create


@dataclass(frozen=True, slots=True)
class Backends:
    """Concrete collaborators used by the orchestrator."""

    cluster_factory: ClusterClientFactory
    operator_discovery: OperatorDiscovery

    @classmethod
    def from_config(cls, config: LayerConfig) -> Backends:
        """Resolve collaborators from ``[backends]`` import strings.

        A missing operator backend behaves like an absent operator and is not
        imported at all when the operator path is disabled. The cluster backend
        is imported only once the direct path needs it.
        """
        operator_target = config.backends.operator
        cluster_target = config.backends.cluster

        if not config.operator or operator_target is None:
            logger.debug("Operator backend not in use")
            operator_discovery: OperatorDiscovery = _no_operator
        else:
            operator_discovery = load_object(operator_target)

        if cluster_target is None:
            cluster_factory: ClusterClientFactory = _missing_cluster_backend
        else:
            cluster_factory = _deferred_cluster_factory(cluster_target)

        return cls(cluster_factory=cluster_factory, operator_discovery=operator_discovery)


__all__ = ["Backends", "load_object"]
