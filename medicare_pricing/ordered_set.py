"""
Insertion-ordered set.

Keeps the first occurrence of each item and remembers the order in which
items were first added.
"""

from typing import Dict, Generic, Hashable, Iterable, Iterator, List, TypeVar

T = TypeVar("T", bound=Hashable)


class OrderedSet(Generic[T]):
    """
    A deduplicating, append-only collection that preserves insertion order.

    Example:
        >>> s = OrderedSet()
        >>> s.add_items(1, 3, 2, 1)
        >>> s.items()
        [1, 3, 2]
    """

    def __init__(self):
        # dict keys keep insertion order
        self._items: Dict[T, None] = {}

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> "OrderedSet[T]":
        s = cls()
        s.add_iterable(items)
        return s

    def items(self) -> List[T]:
        return list(self._items)

    def sorted_items(self) -> List[T]:
        return sorted(self._items)

    def add_items(self, *items: T) -> None:
        self.add_iterable(items)

    def add_iterable(self, items: Iterable[T]) -> None:
        for item in items:
            if item not in self._items:
                self._items[item] = None

    def add_iterables(self, *iterables: Iterable[T]) -> None:
        """Add several iterables in order. ``None`` entries are skipped."""
        for items in iterables:
            if items is not None:
                self.add_iterable(items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({self.items()!r})"
