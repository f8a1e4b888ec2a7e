"""Naming helpers for resources."""

from __future__ import annotations

import hashlib


def guess_plural_name(name: str) -> str:
    """Guess the English plural of a resource kind."""
    if not name:
        return name
    if name.lower() == "endpoints":
        return name
    if name.endswith(("s", "ch", "x", "sh")):
        return name + "es"
    if name.endswith(("f", "fe")):
        return name + "ves"
    if name.endswith("y") and len(name) > 2 and name[-2] not in "[aeiou]":
        return name[:-1] + "ies"
    return name + "s"


def limit(s: str, count: int) -> str:
    """Shorten ``s`` below ``count`` characters, keeping a hash suffix."""
    if len(s) < count:
        return s
    if count < 6:
        raise ValueError(f"count must be at least 6, got {count}")
    return f"{s[:count - 6]}-{hex_prefix(s, 5)}"


def hex_prefix(s: str, length: int) -> str:
    """Return the first ``length`` hex digits of the MD5 of ``s``."""
    return hashlib.md5(s.encode()).hexdigest()[:length]


def safe_concat_name(*names: str) -> str:
    """Join names with ``-``, hashing the tail when the result reaches 64 characters."""
    full_path = "-".join(names)
    if len(full_path) < 64:
        return full_path
    digest = hashlib.sha256(full_path.encode()).hexdigest()
    # The cut may land on a character that is not valid at the end of a name.
    c = full_path[56]
    if "a" <= c <= "z" or "0" <= c <= "9":
        return full_path[:57] + "-" + digest[:5]
    return full_path[:56] + "-" + digest[:6]