"""Deep merge of configuration trees."""

from collections.abc import Mapping
from typing import Any

from deployconf.tree import is_mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration trees, with override taking precedence.

    For nested mappings, values are merged recursively.
    For other values (scalars, sequences, or mismatched kinds), override
    replaces base entirely. Sequences are never merged element-wise.

    Args:
        base: Base tree
        override: Override tree (takes precedence)

    Returns:
        Merged tree. Neither input is modified.
    """
    result = dict(base)

    for key, value in override.items():
        if key in result and is_mapping(result[key]) and is_mapping(value):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
