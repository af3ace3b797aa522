"""Dot-separated path resolution over configuration trees."""

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from deployconf.exceptions import InvalidPathError
from deployconf.observability.logging import get_logger
from deployconf.tree import NodeKind, node_kind

logger = get_logger(__name__)

Segments = tuple[str, ...]


def parse_path(path: str) -> Segments:
    """Split a dot-separated path into segments.

    Raises:
        InvalidPathError: If the path is empty
    """
    if path == "":
        raise InvalidPathError("A non-empty path is required")
    return tuple(path.split("."))


@dataclass(frozen=True)
class PathResult:
    """Outcome of resolving a path against a tree.

    ``found`` is False when a segment was missing or a non-mapping node was
    reached before the last segment; ``depth`` is then the number of
    segments that did resolve.
    """

    found: bool
    value: Any = None
    depth: int = 0


def resolve_path(tree: Mapping[str, Any], segments: Segments) -> PathResult:
    """Walk a tree segment by segment.

    Args:
        tree: Root mapping
        segments: Path segments (empty means the root itself)

    Returns:
        PathResult holding the terminal value when every segment resolved
    """
    node: Any = tree
    for depth, segment in enumerate(segments):
        if node_kind(node) is not NodeKind.MAPPING or segment not in node:
            return PathResult(found=False, depth=depth)
        node = node[segment]
    return PathResult(found=True, value=node, depth=len(segments))


def assign_path(tree: MutableMapping[str, Any], segments: Segments, value: Any) -> None:
    """Assign a value at a path, creating intermediate mappings as needed.

    Intermediate segments that are missing, or that hold a non-mapping
    value, are replaced with empty mappings. The last segment is
    overwritten.

    Args:
        tree: Root mapping, modified in place
        segments: Non-empty path segments
        value: Value to store
    """
    node = tree
    for index, segment in enumerate(segments[:-1]):
        child = node.get(segment)
        if node_kind(child) is not NodeKind.MAPPING:
            if segment in node:
                logger.debug(
                    "config_path_replaced",
                    path=".".join(segments[: index + 1]),
                    kind=node_kind(child).value,
                )
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value
