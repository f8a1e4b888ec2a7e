"""Helpers for splitting key/value strings."""

from __future__ import annotations

from collections.abc import Iterable


def rsplit(s: str, sep: str) -> tuple[str, str]:
    """Split once on ``sep``; a string without ``sep`` yields ``("", s)``."""
    parts = s.split(sep, 1)
    if len(parts) == 1:
        return "", parts[0].strip()
    return parts[0].strip(), parts[1].strip()


def split(s: str, sep: str) -> tuple[str, str]:
    """Split once on ``sep``; a string without ``sep`` yields ``(s, "")``."""
    parts = s.split(sep, 1)
    value = parts[1] if len(parts) > 1 else ""
    return parts[0].strip(), value.strip()


def split_last(s: str, sep: str) -> tuple[str, str]:
    """Split on the last occurrence of ``sep``.

    The value starts one character after the start of the separator, so a
    multi-character separator leaves its tail on the value.
    """
    idx = s.rfind(sep)
    if idx > -1:
        return s[:idx].strip(), s[idx + 1:].strip()
    return s, ""


def split_map(s: str, sep: str) -> dict[str, str]:
    """Parse ``k=v`` pairs separated by ``sep`` into a dict."""
    return split_map_from_slice(s.split(sep))


def split_map_from_slice(parts: Iterable[str]) -> dict[str, str]:
    """Parse each ``k=v`` item of ``parts`` into a dict; later keys win."""
    return dict(split(part, "=") for part in parts)