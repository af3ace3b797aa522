"""Configuration exception hierarchy.

All errors raised by deployconf inherit from ConfigError, which carries
the human-readable message as an attribute. Errors raised by the JSON
parser or by file reads propagate unchanged and are not wrapped here.
"""

from pathlib import Path


class ConfigError(Exception):
    """Base exception for all configuration errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DirectoryNotFoundError(ConfigError):
    """Raised when the configs directory doesn't exist or isn't a directory."""

    def __init__(self, directory: Path) -> None:
        super().__init__(f"Configs directory not found: {directory}")
        self.directory = directory


class DefaultConfigNotFoundError(ConfigError):
    """Raised when the configs directory has no default.json."""

    def __init__(self, directory: Path) -> None:
        super().__init__(
            f"Default configuration file not found: {directory / 'default.json'}. "
            "Create default.json or set CONFIGS_DIRECTORY."
        )
        self.directory = directory


class InvalidPathError(ConfigError):
    """Raised when an empty path is passed where a path is required."""


class ImmutableConfigError(ConfigError):
    """Raised when writing to a configuration that has been frozen."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f'Config is immutable, cannot set "{path}". '
            'Set all values before calling "get" or "has".'
        )
        self.path = path


class NoSuchConfigError(ConfigError):
    """Raised when a path doesn't resolve to a configuration value."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No such config: {path}")
        self.path = path


class InvalidValueError(ConfigError):
    """Raised when a value is not a configuration tree value."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Unsupported configuration value of type {type(value).__name__}"
        )
        self.value = value
