"""Cascading deployment configuration for services.

Configuration is loaded from a configs directory in this order:
1. default.json (public defaults)
2. {DEPLOYMENT}.json (per-deployment overrides)
3. custom-environment-variables.json (secrets, read from environment variables)

Values can be changed with set() until the first get() or has(); from
then on the configuration is read-only.

Usage:
    import deployconf

    deployconf.set("server.port", 8080)
    port = deployconf.get("server.port")
    if deployconf.has("db.password"):
        password = deployconf.get("db.password")
"""

from pathlib import Path
from typing import Any

from deployconf.exceptions import (
    ConfigError,
    DefaultConfigNotFoundError,
    DirectoryNotFoundError,
    ImmutableConfigError,
    InvalidPathError,
    InvalidValueError,
    NoSuchConfigError,
)
from deployconf.store import ConfigState, ConfigStore, InitResult

_store = ConfigStore()


def get_store() -> ConfigStore:
    """Get the process-wide configuration store."""
    return _store


def init(
    deployment_key: str | None = None,
    configs_directory: str | Path | None = None,
) -> InitResult:
    """Load the process-wide configuration. See ConfigStore.init."""
    return _store.init(deployment_key, configs_directory)


def get(path: str = "") -> Any:
    """Get a configuration value, freezing the configuration."""
    return _store.get(path)


def set(path: str, value: Any) -> None:  # noqa: A001
    """Set a configuration value before the configuration is frozen."""
    _store.set(path, value)


def has(path: str) -> bool:
    """Check whether a configuration path exists, freezing the configuration."""
    return _store.has(path)


def reset() -> None:
    """Discard the process-wide configuration.

    Useful for testing; the next access loads the sources again.
    """
    _store.reset()


__all__ = [
    "ConfigError",
    "ConfigState",
    "ConfigStore",
    "DefaultConfigNotFoundError",
    "DirectoryNotFoundError",
    "ImmutableConfigError",
    "InitResult",
    "InvalidPathError",
    "InvalidValueError",
    "NoSuchConfigError",
    "get",
    "get_store",
    "has",
    "init",
    "reset",
    "set",
]
