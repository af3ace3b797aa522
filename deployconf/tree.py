"""Configuration tree value model.

A tree is built from JSON-like values: None, bool, numbers, strings,
sequences and string-keyed mappings. While a store is building, mappings
are plain dicts and sequences are lists. Freezing copies the tree into
FrozenTree mappings and tuples so nothing reachable from a frozen tree
can be mutated.
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any, TypeAlias

from deployconf.exceptions import InvalidValueError

TreeValue: TypeAlias = (
    None | bool | int | float | str | list[Any] | tuple[Any, ...] | Mapping[str, Any]
)


class NodeKind(str, Enum):
    """Kind of a node in a configuration tree."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def node_kind(value: Any) -> NodeKind:
    """Classify a tree node.

    Args:
        value: Node to classify

    Returns:
        The node's kind

    Raises:
        InvalidValueError: If the value is not a tree value
    """
    # bool before number: bool is a subclass of int
    if value is None:
        return NodeKind.NULL
    if isinstance(value, bool):
        return NodeKind.BOOL
    if isinstance(value, int | float):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, list | tuple):
        return NodeKind.SEQUENCE
    if isinstance(value, Mapping):
        return NodeKind.MAPPING
    raise InvalidValueError(value)


def is_mapping(value: Any) -> bool:
    """Return True if the value is a mapping node."""
    return isinstance(value, Mapping)


class FrozenTree(Mapping[str, Any]):
    """Read-only mapping node of a frozen configuration tree."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = {key: freeze(value) for key, value in data.items()}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrozenTree({self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of this tree."""
        return thaw(self)


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of a tree value.

    Raises:
        InvalidValueError: If the tree contains a non-tree value
    """
    kind = node_kind(value)
    if kind is NodeKind.MAPPING:
        if isinstance(value, FrozenTree):
            return value
        return FrozenTree(value)
    if kind is NodeKind.SEQUENCE:
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a mutable deep copy of a tree value (dicts and lists)."""
    kind = node_kind(value)
    if kind is NodeKind.MAPPING:
        return {key: thaw(item) for key, item in value.items()}
    if kind is NodeKind.SEQUENCE:
        return [thaw(item) for item in value]
    return value
