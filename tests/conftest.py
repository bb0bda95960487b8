"""Pytest fixtures for mirrorlink tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

from mirrorlink.config import OPERATOR_ENV, STARTUP_TIMEOUT_ENV, LayerConfig

if TYPE_CHECKING:
    from pathlib import Path


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path: Path) -> Path:
    """Point the config directory at a temp dir and clear env overrides."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("MIRRORLINK_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv(OPERATOR_ENV, raising=False)
    monkeypatch.delenv(STARTUP_TIMEOUT_ENV, raising=False)
    return config_dir


@pytest.fixture
def config_file(_isolated_config: Path):
    """Factory writing TOML text to the isolated user config file."""

    def _write(content: str) -> Path:
        _isolated_config.mkdir(parents=True, exist_ok=True)
        path = _isolated_config / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config():
    """Factory for in-memory configurations."""

    def _factory(*, operator: bool = True, startup_timeout: int = 60) -> LayerConfig:
        return LayerConfig.model_validate(
            {"operator": operator, "agent": {"startup_timeout": startup_timeout}}
        )

    return _factory
