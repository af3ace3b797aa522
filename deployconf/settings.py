"""Loader settings for deployconf.

Two environment variables steer where configuration is loaded from:
- DEPLOYMENT_KEY: name of the variable holding the deployment name
- CONFIGS_DIRECTORY: directory holding the JSON sources

Environment variables take precedence over arguments passed to init().
"""

import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_DEPLOYMENT_KEY = "DEPLOYMENT"

# Environment the next LoaderSettings instance reads from
_environ: ContextVar[Mapping[str, str] | None] = ContextVar("deployconf_environ", default=None)


class EnvironSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading upper-cased field names from an environment mapping.

    Empty values are treated as unset.
    """

    def __init__(self, settings_cls: type[BaseSettings], environ: Mapping[str, str]) -> None:
        super().__init__(settings_cls)
        self._environ = environ

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from the environment."""
        value = self._environ.get(field_name.upper()) or None
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the values set in the environment."""
        values: dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, found = self.get_field_value(field, field_name)
            if found:
                values[key] = value
        return values


class LoaderSettings(BaseSettings):
    """Where and how configuration sources are located.

    Priority order (highest to lowest):
    1. DEPLOYMENT_KEY / CONFIGS_DIRECTORY environment variables
    2. init() arguments
    3. defaults
    """

    model_config = SettingsConfigDict(extra="ignore")

    deployment_key: str = Field(
        default=DEFAULT_DEPLOYMENT_KEY,
        min_length=1,
        description="Name of the environment variable holding the deployment name",
    )
    configs_directory: Path = Field(
        default_factory=lambda: Path.cwd() / "configs",
        description="Directory holding the JSON configuration sources",
    )

    @field_validator("configs_directory")
    @classmethod
    def _absolute_directory(cls, value: Path) -> Path:
        """Resolve relative directories against the working directory."""
        return Path(os.path.abspath(value.expanduser()))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Put the environment ahead of constructor arguments."""
        environ = _environ.get()
        return (
            EnvironSettingsSource(settings_cls, os.environ if environ is None else environ),
            init_settings,
        )


@contextmanager
def _reading_from(environ: Mapping[str, str]) -> Iterator[None]:
    token = _environ.set(environ)
    try:
        yield
    finally:
        _environ.reset(token)


def load_settings(
    environ: Mapping[str, str] | None = None,
    deployment_key: str | None = None,
    configs_directory: str | Path | None = None,
) -> LoaderSettings:
    """Build loader settings from the environment and init() arguments.

    Args:
        environ: Environment to read; defaults to os.environ
        deployment_key: Fallback deployment variable name
        configs_directory: Fallback configs directory

    Returns:
        Validated LoaderSettings
    """
    overrides: dict[str, Any] = {}
    if deployment_key is not None:
        overrides["deployment_key"] = deployment_key
    if configs_directory is not None:
        overrides["configs_directory"] = configs_directory

    with _reading_from(os.environ if environ is None else environ):
        return LoaderSettings(**overrides)
