"""Environment variable substitution for the custom-environment-variables source.

Every leaf of that source names an environment variable. Substitution
replaces each name with the variable's value; leaves whose variable is
unset are left out of the result so they read as absent rather than as
null or an empty string.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from deployconf.observability.logging import get_logger
from deployconf.tree import NodeKind, node_kind

logger = get_logger(__name__)

EnvLookup = Callable[[str], str | None]

# Marks a node that was dropped during substitution
_ABSENT = object()


def substitute_env(tree: Mapping[str, Any], lookup: EnvLookup) -> dict[str, Any]:
    """Replace every leaf variable name in a tree with that variable's value.

    Mappings and sequences are walked structurally. A leaf whose variable
    is unset is omitted, as is any non-empty container left empty after
    its leaves were omitted.

    Args:
        tree: Parsed custom-environment-variables tree
        lookup: Returns a variable's value, or None when it is unset

    Returns:
        New tree holding the variable values
    """
    return _substitute_mapping(tree, lookup, prefix="")


def _substitute_mapping(
    tree: Mapping[str, Any], lookup: EnvLookup, prefix: str
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in tree.items():
        substituted = _substitute(value, lookup, f"{prefix}{key}")
        if substituted is not _ABSENT:
            result[key] = substituted
    return result


def _substitute_sequence(items: Sequence[Any], lookup: EnvLookup, path: str) -> list[Any]:
    result: list[Any] = []
    for index, item in enumerate(items):
        substituted = _substitute(item, lookup, f"{path}[{index}]")
        if substituted is not _ABSENT:
            result.append(substituted)
    return result


def _substitute(value: Any, lookup: EnvLookup, path: str) -> Any:
    kind = node_kind(value)

    if kind is NodeKind.MAPPING:
        mapping = _substitute_mapping(value, lookup, prefix=f"{path}.")
        return mapping if mapping or not value else _ABSENT

    if kind is NodeKind.SEQUENCE:
        sequence = _substitute_sequence(value, lookup, path)
        return sequence if sequence or not value else _ABSENT

    if kind is NodeKind.STRING:
        resolved = lookup(value)
        if resolved is None:
            logger.debug("config_env_var_unset", path=path, variable=value)
            return _ABSENT
        return resolved

    logger.warning(
        "config_env_var_name_invalid",
        path=path,
        kind=kind.value,
    )
    return _ABSENT
