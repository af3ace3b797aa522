"""Config source discovery and ordering.

Sources are applied in increasing precedence:
1. default.json (required)
2. {deployment}.json (optional, lowercased deployment name)
3. custom-environment-variables.json (optional)
"""

from collections.abc import Collection
from pathlib import Path

from deployconf.exceptions import DirectoryNotFoundError

DEFAULT_SOURCE = "default.json"
CUSTOM_ENV_SOURCE = "custom-environment-variables.json"
DEFAULT_ORDER: tuple[str, ...] = (DEFAULT_SOURCE, CUSTOM_ENV_SOURCE)


def deployment_source(deployment: str) -> str:
    """Get the file name of a deployment's override source."""
    return f"{deployment.lower()}.json"


def resolve_sources(
    directory: Path,  # noqa: ARG001
    deployment: str | None,
    available: Collection[str],
) -> list[str]:
    """Determine which sources to load and in which order.

    Sources missing from ``available`` are skipped without error.

    Args:
        directory: Configs directory the names are relative to
        deployment: Deployment name, or None when no deployment is selected
        available: File names present in the directory

    Returns:
        Source file names, least specific first
    """
    order = list(DEFAULT_ORDER)
    if deployment:
        order.insert(1, deployment_source(deployment))

    return [name for name in order if name in available]


def list_config_files(directory: Path) -> set[str]:
    """List the names of regular files in the configs directory.

    Args:
        directory: Configs directory

    Returns:
        Set of file names

    Raises:
        DirectoryNotFoundError: If the directory doesn't exist or isn't readable
    """
    if not directory.is_dir():
        raise DirectoryNotFoundError(directory)

    try:
        return {entry.name for entry in directory.iterdir() if entry.is_file()}
    except PermissionError as exc:
        raise DirectoryNotFoundError(directory) from exc
