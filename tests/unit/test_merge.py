"""Unit tests for deep_merge."""

from deployconf.merge import deep_merge


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merge_flat_dicts(self) -> None:
        """Flat dictionaries are merged correctly."""
        result = deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge_preserves_siblings(self) -> None:
        """Nested mappings are merged recursively, untouched keys survive."""
        result = deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        assert result == {"a": {"x": 1, "y": 3}}

    def test_sequences_replaced_wholesale(self) -> None:
        """Sequences are replaced, never merged element-wise."""
        result = deep_merge({"a": [1, 2, 3]}, {"a": [9]})
        assert result == {"a": [9]}

    def test_mapping_replaced_by_scalar(self) -> None:
        """A scalar override replaces a mapping entirely."""
        result = deep_merge({"a": {"x": 1}}, {"a": "replaced"})
        assert result == {"a": "replaced"}

    def test_scalar_replaced_by_mapping(self) -> None:
        """A mapping override replaces a scalar entirely."""
        result = deep_merge({"a": 1}, {"a": {"x": 1}})
        assert result == {"a": {"x": 1}}

    def test_null_override_wins(self) -> None:
        """An explicit null in the override replaces the base value."""
        result = deep_merge({"a": {"x": 1}}, {"a": None})
        assert result == {"a": None}

    def test_inputs_unmodified(self) -> None:
        """Neither input is modified."""
        base = {"a": {"x": 1}}
        override = {"a": {"y": 2}, "b": 3}
        deep_merge(base, override)
        assert base == {"a": {"x": 1}}
        assert override == {"a": {"y": 2}, "b": 3}

    def test_empty_sides(self) -> None:
        """Merging with an empty side returns the other side's content."""
        assert deep_merge({"a": 1}, {}) == {"a": 1}
        assert deep_merge({}, {"a": 1}) == {"a": 1}

    def test_order_dependent(self) -> None:
        """Later merges take precedence over earlier ones."""
        layers = [{"a": 1}, {"a": 2}, {"a": 3}]
        merged: dict = {}
        for layer in layers:
            merged = deep_merge(merged, layer)
        assert merged == {"a": 3}
