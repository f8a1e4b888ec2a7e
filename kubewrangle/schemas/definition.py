"""Parsing of schema field type names such as ``array[string]``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_map_type(field_type: str) -> bool:
    """Return whether ``field_type`` has the form ``map[...]``."""
    return field_type.startswith("map[") and field_type.endswith("]")


def is_array_type(field_type: str) -> bool:
    """Return whether ``field_type`` has the form ``array[...]``."""
    return field_type.startswith("array[") and field_type.endswith("]")


def is_reference_type(field_type: str) -> bool:
    """Return whether ``field_type`` has the form ``reference[...]``."""
    return field_type.startswith("reference[") and field_type.endswith("]")


def has_reference_type(field_type: str) -> bool:
    """Return whether ``field_type`` mentions a reference anywhere."""
    return "reference[" in field_type


def sub_type(field_type: str) -> str:
    """Return the text between the first ``[`` and the final character.

    A type without a bracket, or with one at the very start or end, is
    returned unchanged.
    """
    i = field_type.find("[")
    if i <= 0 or i >= len(field_type) - 1:
        return field_type
    return field_type[i + 1:-1]


def get_type(data: Mapping[str, Any]) -> str:
    """Return the ``type`` entry of ``data`` as a string."""
    return _to_string(data.get("type"))