"""A minimal set of strings."""

from __future__ import annotations

from collections.abc import Iterator


class StringSet:
    """An unordered collection of distinct strings."""

    def __init__(self) -> None:
        self._items: dict[str, None] = {}

    def add(self, *items: str) -> None:
        """Add every given string."""
        for item in items:
            self._items[item] = None

    def delete(self, *items: str) -> None:
        """Remove every given string that is present."""
        for item in items:
            self._items.pop(item, None)

    def has(self, item: str) -> bool:
        """Return whether ``item`` is in the set."""
        return item in self._items

    def values(self) -> list[str]:
        """Return the members as a list."""
        return list(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)