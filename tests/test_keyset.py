"""
Tests for key set algebra and sync strategies.
"""

import pytest
from envmage.core.keyset import (
    KeySetComparison,
    SyncStrategy,
    apply_strategy,
    changed_keys,
    compare,
    extra_keys,
    merge,
    missing_keys,
    parse_strategy,
)


A = {"X": "1", "Y": "2"}
B = {"Y": "3", "Z": "4"}


class TestSetAlgebra:
    """Test missing/extra/changed keys."""

    def test_missing_keys(self):
        """Keys in B that A lacks."""
        assert missing_keys(A, B) == ["Z"]

    def test_extra_keys(self):
        """Keys in A that B lacks."""
        assert extra_keys(A, B) == ["X"]

    def test_changed_keys(self):
        """Keys in both with different values."""
        assert changed_keys(A, B) == ["Y"]

    def test_identical_mappings(self):
        assert compare(A, dict(A)).identical

    def test_changed_is_exact(self):
        """No trimming or coercion when comparing values."""
        assert changed_keys({"K": "1"}, {"K": "1.0"}) == ["K"]
        assert changed_keys({"K": "a"}, {"K": "a "}) == ["K"]

    def test_empty_mappings(self):
        assert missing_keys({}, {}) == []
        assert extra_keys({}, {"A": "1"}) == []
        assert missing_keys({}, {"A": "1"}) == ["A"]

    def test_order_follows_reference(self):
        """Missing keys come back in the reference mapping's order."""
        assert missing_keys({}, {"C": "", "A": "", "B": ""}) == ["C", "A", "B"]

    def test_compare(self):
        result = compare(A, B)
        assert result == KeySetComparison(missing=["Z"], extra=["X"], changed=["Y"])
        assert not result.identical

    def test_inputs_not_mutated(self):
        a, b = dict(A), dict(B)
        compare(a, b)
        merge(a, b)
        assert a == A and b == B


class TestMerge:
    """Test left-to-right merging."""

    def test_later_wins(self):
        assert merge({"A": "1"}, {"A": "2"}) == {"A": "2"}

    def test_position_of_first_appearance(self):
        merged = merge({"A": "1", "B": "2"}, {"C": "3", "A": "9"})
        assert list(merged.items()) == [("A", "9"), ("B", "2"), ("C", "3")]

    def test_no_mappings(self):
        assert merge() == {}


class TestStrategies:
    """Test the three sync strategies."""

    source = {"A": "1", "B": "2"}
    target = {"A": "x", "B": "y", "C": "z"}

    def test_overwrite(self):
        """Target becomes a copy of source."""
        result = apply_strategy(self.source, self.target, SyncStrategy.OVERWRITE)
        assert result == {"A": "1", "B": "2"}
        assert result is not self.source

    def test_merge(self):
        """Source wins, target extras survive."""
        result = apply_strategy(self.source, self.target, SyncStrategy.MERGE)
        assert result == {"A": "1", "B": "2", "C": "z"}

    def test_preserve(self):
        """Target wins, source fills gaps."""
        result = apply_strategy({"A": "1", "D": "4"}, self.target, SyncStrategy.PRESERVE)
        assert result == {"A": "x", "B": "y", "C": "z", "D": "4"}
        assert list(result) == ["A", "B", "C", "D"]

    def test_default_is_merge(self):
        assert apply_strategy(self.source, self.target) == {"A": "1", "B": "2", "C": "z"}


class TestParseStrategy:
    """Test strategy name coercion."""

    def test_names(self):
        assert parse_strategy("merge") == SyncStrategy.MERGE
        assert parse_strategy("OVERWRITE") == SyncStrategy.OVERWRITE
        assert parse_strategy(SyncStrategy.PRESERVE) == SyncStrategy.PRESERVE

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown sync strategy"):
            parse_strategy("union")
