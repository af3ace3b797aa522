"""Unit tests for the configuration tree value model."""

import pytest

from deployconf.exceptions import InvalidValueError
from deployconf.tree import FrozenTree, NodeKind, freeze, node_kind, thaw


class TestNodeKind:
    """Tests for node_kind function."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, NodeKind.NULL),
            (True, NodeKind.BOOL),
            (0, NodeKind.NUMBER),
            (1.5, NodeKind.NUMBER),
            ("x", NodeKind.STRING),
            ([1], NodeKind.SEQUENCE),
            ((1,), NodeKind.SEQUENCE),
            ({"a": 1}, NodeKind.MAPPING),
        ],
    )
    def test_classifies_tree_values(self, value: object, kind: NodeKind) -> None:
        """Each tree value has exactly one kind."""
        assert node_kind(value) is kind

    def test_rejects_other_values(self) -> None:
        """Values outside the tree model are rejected."""
        with pytest.raises(InvalidValueError):
            node_kind(object())


class TestFreeze:
    """Tests for freeze and thaw."""

    def test_frozen_mapping_is_read_only(self) -> None:
        """Frozen mappings support no item assignment."""
        frozen = freeze({"a": {"b": 1}})
        assert isinstance(frozen, FrozenTree)
        with pytest.raises(TypeError):
            frozen["a"] = 2  # type: ignore[index]

    def test_sequences_become_tuples(self) -> None:
        """Frozen sequences are tuples."""
        frozen = freeze({"a": [1, {"b": 2}]})
        assert frozen["a"][0] == 1
        assert isinstance(frozen["a"], tuple)
        assert isinstance(frozen["a"][1], FrozenTree)

    def test_freeze_copies(self) -> None:
        """Changing the source after freezing doesn't affect the frozen tree."""
        source = {"a": {"b": [1]}}
        frozen = freeze(source)
        source["a"]["b"].append(2)
        assert frozen["a"]["b"] == (1,)

    def test_frozen_tree_compares_to_dict(self) -> None:
        """Frozen mappings compare equal to equivalent dicts."""
        assert freeze({"a": {"b": 1}}) == {"a": {"b": 1}}

    def test_thaw_round_trip(self) -> None:
        """Thawing returns mutable dicts and lists."""
        thawed = thaw(freeze({"a": [1, {"b": 2}]}))
        assert thawed == {"a": [1, {"b": 2}]}
        assert isinstance(thawed["a"], list)
        assert isinstance(thawed["a"][1], dict)

    def test_to_dict(self) -> None:
        """FrozenTree.to_dict returns a plain dict."""
        frozen = freeze({"a": {"b": 1}})
        assert type(frozen.to_dict()["a"]) is dict
