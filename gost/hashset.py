"""A simple set of hashable values."""

from __future__ import annotations

from typing import Any, Hashable, Iterator


class HashSet:
    """A set whose add, remove and contains take any number of items."""

    def __init__(self, *args: Hashable) -> None:
        self._items: dict[Hashable, None] = {}
        self.add(*args)

    def add(self, *args: Hashable) -> None:
        """Add every given item."""
        for item in args:
            self._items[item] = None

    def remove(self, *args: Hashable) -> None:
        """Remove every given item; missing items are ignored."""
        for item in args:
            self._items.pop(item, None)

    def contains(self, *args: Hashable) -> bool:
        """Return True if every given item is in the set (True for none)."""
        return all(item in self._items for item in args)

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def is_empty(self) -> bool:
        """Return True if the set holds no items."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._items)

    def clear(self) -> None:
        """Remove all items."""
        self._items = {}

    def values(self) -> list[Hashable]:
        """Return the items as a list."""
        return list(self._items)

    def __str__(self) -> str:
        return "HashSet\n" + ", ".join(str(item) for item in self._items)

    def __repr__(self) -> str:
        return f"HashSet({', '.join(repr(item) for item in self._items)})"