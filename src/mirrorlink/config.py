"""Configuration loader for mirrorlink."""

from __future__ import annotations

import os
import tomllib
from typing import TYPE_CHECKING, Any

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mirrorlink.errors import ConfigError
from mirrorlink.paths import get_config_path

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

OPERATOR_ENV = "MIRRORLINK_OPERATOR"
STARTUP_TIMEOUT_ENV = "MIRRORLINK_AGENT_STARTUP_TIMEOUT"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class AgentConfig(BaseModel):
    """Settings for agents provisioned directly in the cluster."""

    model_config = ConfigDict(frozen=True)

    startup_timeout: int = Field(
        default=60,
        ge=1,
        description="Seconds to wait for the agent workload to be created",
    )


class BackendsConfig(BaseModel):
    """Import strings for the collaborators used to reach an agent."""

    model_config = ConfigDict(frozen=True)

    cluster: str | None = Field(
        default=None,
        description="'module:attribute' of the cluster client factory",
    )
    operator: str | None = Field(
        default=None,
        description="'module:attribute' of the operator discovery callable",
    )


class LayerConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(frozen=True)

    operator: bool = Field(default=True, description="Try the operator before direct provisioning")
    agent: AgentConfig = Field(default_factory=AgentConfig)
    backends: BackendsConfig = Field(default_factory=BackendsConfig)

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> LayerConfig:
        """Load configuration from TOML file (or defaults) and apply env overrides."""
        if config_path is None:
            config_path = get_config_path()

        data: dict[str, Any] = {}
        if config_path.exists():
            try:
                with open(config_path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(str(exc), path=config_path) from exc

        data = _apply_env_overrides(data, os.environ if environ is None else environ)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc), path=config_path) from exc

    def with_overrides(
        self,
        *,
        operator: bool | None = None,
        startup_timeout: int | None = None,
    ) -> LayerConfig:
        """Return a copy with the given fields replaced (None = no change)."""
        data = self.model_dump()
        if operator is not None:
            data["operator"] = operator
        if startup_timeout is not None:
            data["agent"]["startup_timeout"] = startup_timeout
        try:
            return LayerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc)) from exc

    def to_toml(self) -> str:
        """Serialize the configuration as a TOML document."""
        doc = tomlkit.document()
        doc["operator"] = self.operator

        agent_table = tomlkit.table()
        for key, value in self.agent.model_dump().items():
            agent_table[key] = value
        doc["agent"] = agent_table

        backends_table = tomlkit.table()
        for key, value in self.backends.model_dump().items():
            if value is not None:
                backends_table[key] = value
        doc["backends"] = backends_table

        return tomlkit.dumps(doc)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{name} must be at least 1, got {value}")
    return value


def _apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Layer environment variables over file data; the environment wins."""
    merged = dict(data)
    raw_operator = environ.get(OPERATOR_ENV)
    if raw_operator is not None:
        merged["operator"] = _parse_bool(OPERATOR_ENV, raw_operator)

    raw_timeout = environ.get(STARTUP_TIMEOUT_ENV)
    if raw_timeout is not None:
        agent = dict(merged.get("agent") or {})
        agent["startup_timeout"] = _parse_positive_int(STARTUP_TIMEOUT_ENV, raw_timeout)
        merged["agent"] = agent
    return merged


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


__all__ = [
    "OPERATOR_ENV",
    "STARTUP_TIMEOUT_ENV",
    "AgentConfig",
    "BackendsConfig",
    "LayerConfig",
]
