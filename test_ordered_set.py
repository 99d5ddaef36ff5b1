"""
Tests for the insertion-ordered set.

Run with: pytest test_ordered_set.py -v
"""

import pytest

from medicare_pricing import OrderedSet


class TestOrderedSet:
    """Test OrderedSet behavior."""

    def test_add_items(self):
        """Test that duplicates keep their first position."""
        s = OrderedSet()
        s.add_items(1, 3, 2, 1)
        assert s.items() == [1, 3, 2]
        assert len(s) == 3

    def test_from_iterable(self):
        s = OrderedSet.from_iterable(["b", "a", "b", "c"])
        assert s.items() == ["b", "a", "c"]

    def test_sorted_items(self):
        """Test sorted output without changing insertion order."""
        s = OrderedSet.from_iterable([3, 1, 2, 3])
        assert s.sorted_items() == [1, 2, 3]
        assert s.items() == [3, 1, 2]

    def test_add_iterables(self):
        """Test adding several iterables, skipping None."""
        s = OrderedSet()
        s.add_iterables(["a", "b"], None, ["b", "a", "c"], [])
        assert s.items() == ["a", "b", "c"]

    def test_contains(self):
        s = OrderedSet.from_iterable(["x"])
        assert "x" in s
        assert "y" not in s

    def test_iter(self):
        s = OrderedSet.from_iterable("hello")
        assert list(s) == ["h", "e", "l", "o"]

    def test_empty(self):
        s = OrderedSet()
        assert s.items() == []
        assert s.sorted_items() == []
        assert len(s) == 0

    def test_repr(self):
        assert repr(OrderedSet.from_iterable([1, 2])) == "OrderedSet([1, 2])"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
