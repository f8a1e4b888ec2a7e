"""Tracking of strings already encountered."""

from __future__ import annotations


class Seen:
    """Remembers strings and reports repeats."""

    def __init__(self) -> None:
        self._values: set[str] = set()

    def seen(self, value: str) -> bool:
        """Return ``True`` if ``value`` was seen before, recording it otherwise."""
        if value in self._values:
            return True
        self._values.add(value)
        return False