"""Configuration store lifecycle.

A ConfigStore moves through three states:
- UNINITIALIZED: nothing loaded yet
- BUILDING: sources loaded, the tree may still be changed with set()
- FROZEN: read-only; entered on the first get() or has()

The first read freezes the tree for good. Only init() or reset() start
over, which is meant for test isolation.
"""

import json
import os
import threading
from collections.abc import Callable, Collection, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from deployconf.env import substitute_env
from deployconf.exceptions import (
    DefaultConfigNotFoundError,
    ImmutableConfigError,
    InvalidValueError,
    NoSuchConfigError,
)
from deployconf.merge import deep_merge
from deployconf.observability.logging import get_logger
from deployconf.paths import PathResult, assign_path, parse_path, resolve_path
from deployconf.settings import load_settings
from deployconf.sources import (
    CUSTOM_ENV_SOURCE,
    DEFAULT_SOURCE,
    list_config_files,
    resolve_sources,
)
from deployconf.tree import FrozenTree, NodeKind, freeze, node_kind, thaw

logger = get_logger(__name__)

FileLister = Callable[[Path], Collection[str]]
Parser = Callable[[str], Any]


class ConfigState(str, Enum):
    """Lifecycle state of a ConfigStore."""

    UNINITIALIZED = "uninitialized"
    BUILDING = "building"
    FROZEN = "frozen"


class InitResult(BaseModel):
    """Diagnostics describing how a store was initialized."""

    configs_directory: Path = Field(..., description="Directory sources were read from")
    deployment_key: str = Field(
        ..., description="Environment variable holding the deployment name"
    )
    deployment: str | None = Field(
        default=None, description="Deployment name, if one was set"
    )
    source_order: list[str] = Field(
        default_factory=list, description="Sources loaded, least specific first"
    )


class ConfigStore:
    """Owner of one configuration tree and its lifecycle.

    Collaborators can be injected for testing:
    - environ: environment mapping (defaults to os.environ)
    - list_files: lists file names in the configs directory
    - parse: turns JSON text into a tree
    """

    def __init__(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        list_files: FileLister | None = None,
        parse: Parser | None = None,
    ) -> None:
        self._environ = environ
        self._list_files = list_files or list_config_files
        self._parse = parse or json.loads
        self._lock = threading.RLock()
        self._state = ConfigState.UNINITIALIZED
        self._tree: dict[str, Any] = {}
        self._frozen: FrozenTree | None = None
        self.last_init: InitResult | None = None

    @property
    def environ(self) -> Mapping[str, str]:
        """Environment the store reads variables from."""
        return os.environ if self._environ is None else self._environ

    @property
    def state(self) -> ConfigState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_frozen(self) -> bool:
        """Whether the tree has become read-only."""
        return self._state is ConfigState.FROZEN

    def init(
        self,
        deployment_key: str | None = None,
        configs_directory: str | Path | None = None,
    ) -> InitResult:
        """Load all sources into a fresh, writable tree.

        Loading order (later overrides earlier):
        1. default.json (required)
        2. {deployment}.json (optional)
        3. custom-environment-variables.json (optional, values from environment)

        DEPLOYMENT_KEY and CONFIGS_DIRECTORY, when set, take precedence over
        the arguments. Calling init() on a frozen store starts over.

        Args:
            deployment_key: Name of the variable holding the deployment name
                (default DEPLOYMENT)
            configs_directory: Directory holding the sources
                (default ./configs)

        Returns:
            InitResult describing the directory, deployment and source order

        Raises:
            DirectoryNotFoundError: If the configs directory is missing
            DefaultConfigNotFoundError: If default.json is missing
            InvalidValueError: If a source's top level is not an object
            json.JSONDecodeError: If a source is not valid JSON
        """
        environ = self.environ
        settings = load_settings(environ, deployment_key, configs_directory)
        directory = settings.configs_directory
        deployment = environ.get(settings.deployment_key) or None

        available = self._list_files(directory)
        if DEFAULT_SOURCE not in available:
            raise DefaultConfigNotFoundError(directory)

        source_order = resolve_sources(directory, deployment, available)
        logger.debug(
            "config_sources_resolved",
            configs_directory=str(directory),
            deployment=deployment,
            source_order=source_order,
        )

        tree: dict[str, Any] = {}
        for name in source_order:
            layer = self._load_source(directory / name)
            if name == CUSTOM_ENV_SOURCE:
                layer = substitute_env(layer, environ.get)
            tree = deep_merge(tree, layer)
            logger.debug("config_source_loaded", source=name, keys=sorted(layer))

        result = InitResult(
            configs_directory=directory,
            deployment_key=settings.deployment_key,
            deployment=deployment,
            source_order=source_order,
        )
        with self._lock:
            self._tree = thaw(tree)
            self._frozen = None
            self._state = ConfigState.BUILDING
            self.last_init = result

        logger.info(
            "config_initialized",
            configs_directory=str(directory),
            deployment=deployment,
            source_order=source_order,
        )
        return result

    def set(self, path: str, value: Any) -> None:
        """Set a value at a dot-separated path.

        Missing intermediate mappings are created; intermediate non-mapping
        values are replaced by mappings.

        Args:
            path: Dot-separated path, e.g. "db.pool.size"
            value: Tree value to store (copied into the tree)

        Raises:
            InvalidPathError: If the path is empty
            InvalidValueError: If the value is not a tree value
            ImmutableConfigError: If the store is frozen
        """
        segments = parse_path(path)
        copied = thaw(value)
        with self._lock:
            self._ensure_initialized()
            if self._state is ConfigState.FROZEN:
                raise ImmutableConfigError(path)
            assign_path(self._tree, segments, copied)

    def get(self, path: str = "") -> Any:
        """Get the value at a dot-separated path, freezing the store.

        Args:
            path: Dot-separated path; "" returns the whole tree

        Returns:
            The value; mappings are read-only FrozenTree, sequences tuples

        Raises:
            NoSuchConfigError: If the path doesn't resolve
        """
        result = self.lookup(path)
        if not result.found:
            raise NoSuchConfigError(path)
        return result.value

    def lookup(self, path: str = "") -> PathResult:
        """Resolve a path without raising, freezing the store.

        Args:
            path: Dot-separated path; "" resolves to the whole tree

        Returns:
            PathResult; ``found`` is False if the path doesn't resolve
        """
        tree = self._freeze()
        if path == "":
            return PathResult(found=True, value=tree)
        return resolve_path(tree, parse_path(path))

    def has(self, path: str) -> bool:
        """Check whether a dot-separated path resolves, freezing the store.

        Args:
            path: Dot-separated path

        Returns:
            True if every segment resolves, whatever the value

        Raises:
            InvalidPathError: If the path is empty
        """
        segments = parse_path(path)
        return resolve_path(self._freeze(), segments).found

    def reset(self) -> None:
        """Discard the tree and return to UNINITIALIZED."""
        with self._lock:
            self._state = ConfigState.UNINITIALIZED
            self._tree = {}
            self._frozen = None
            self.last_init = None
        logger.debug("config_reset")

    def _ensure_initialized(self) -> None:
        """Load sources with default settings if nothing is loaded yet."""
        with self._lock:
            if self._state is ConfigState.UNINITIALIZED:
                self.init()

    def _freeze(self) -> FrozenTree:
        """Freeze the tree once and return the frozen snapshot."""
        frozen = self._frozen
        if frozen is not None:
            return frozen

        with self._lock:
            self._ensure_initialized()
            if self._frozen is None:
                self._frozen = freeze(self._tree)
                self._tree = {}
                self._state = ConfigState.FROZEN
                logger.debug("config_frozen", keys=sorted(self._frozen))
            return self._frozen

    def _load_source(self, path: Path) -> dict[str, Any]:
        """Read and parse one source file."""
        text = path.read_text(encoding="utf-8")
        layer = self._parse(text)
        if node_kind(layer) is not NodeKind.MAPPING:
            raise InvalidValueError(layer)
        return layer
