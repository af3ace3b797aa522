"""Shared test fixtures for the deployconf test suite."""

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

import deployconf
from deployconf import ConfigStore

ENV_VARS = ("DEPLOYMENT", "DEPLOYMENT_KEY", "CONFIGS_DIRECTORY")


@pytest.fixture
def configs_dir(tmp_path: Path) -> Path:
    """Create a temporary configs directory for testing."""
    directory = tmp_path / "configs"
    directory.mkdir()
    return directory


@pytest.fixture
def write_configs(configs_dir: Path) -> Callable[[dict[str, Any]], Path]:
    """Factory fixture to create JSON sources in the test configs directory.

    Usage:
        def test_something(write_configs):
            write_configs({
                "default.json": {"app": {"name": "test"}},
                "production.json": {"app": {"debug": False}},
            })
    """

    def _write_configs(files: dict[str, Any]) -> Path:
        for filename, content in files.items():
            text = content if isinstance(content, str) else json.dumps(content)
            (configs_dir / filename).write_text(text)
        return configs_dir

    return _write_configs


@pytest.fixture
def store_factory(configs_dir: Path) -> Callable[..., ConfigStore]:
    """Factory fixture building a store over an isolated environment.

    The environment always points CONFIGS_DIRECTORY at the test directory
    unless the caller overrides it.
    """

    def _store_factory(**environ: str) -> ConfigStore:
        env = {"CONFIGS_DIRECTORY": str(configs_dir), **environ}
        return ConfigStore(environ=env)

    return _store_factory


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear loader variables and reset the process-wide store around each test.

    This ensures test isolation for the module-level API.
    """
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    deployconf.reset()
    yield
    deployconf.reset()
