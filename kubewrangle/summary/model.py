"""Summary data model and helpers for reading unstructured objects."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


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


def nested_value(obj: Any, *names: str) -> Any:
    """Walk nested mappings by key; return ``None`` when any step is missing."""
    current = obj
    for name in names:
        if not isinstance(current, Mapping):
            return None
        current = current.get(name)
    return current


def nested_string(obj: Any, *names: str) -> str:
    """Return the nested value as a string, ``""`` when missing."""
    return _to_string(nested_value(obj, *names))


def nested_map(obj: Any, *names: str) -> Optional[dict]:
    """Return the nested value if it is a mapping, otherwise ``None``."""
    value = nested_value(obj, *names)
    return value if isinstance(value, dict) else None


def nested_slice(obj: Any, *names: str) -> list[dict]:
    """Return the nested list with each item as a mapping (non-mappings become empty)."""
    value = nested_value(obj, *names)
    if not isinstance(value, (list, tuple)):
        return []
    return [item if isinstance(item, dict) else {} for item in value]


@dataclass
class Relationship:
    """A link from an object to another object."""

    name: str = ""
    namespace: str = ""
    controlled_by: bool = False
    kind: str = ""
    api_version: str = ""
    inbound: bool = False
    type: str = ""
    selector: Optional[dict] = None


@dataclass
class Summary:
    """The computed state of an object."""

    state: str = ""
    error: bool = False
    transitioning: bool = False
    message: list[str] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)
    relationships: list[Relationship] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.transitioning and not self.error:
            return self.state
        msg = ""
        if self.transitioning:
            msg = "[progressing"
        if self.error:
            msg = msg + ",error]" if msg else "error]"
        else:
            msg += "]"
        if self.message:
            msg = msg + " " + ", ".join(self.message)
        return msg

    def is_ready(self) -> bool:
        return not self.error and not self.transitioning

    def copy(self) -> Summary:
        """Return a copy whose lists and attributes are independent of this one."""
        return Summary(
            state=self.state,
            error=self.error,
            transitioning=self.transitioning,
            message=list(self.message),
            attributes=dict(self.attributes),
            relationships=list(self.relationships),
        )


class Condition:
    """A view over one condition mapping of an object's status."""

    __slots__ = ("object",)

    def __init__(self, obj: Optional[dict] = None) -> None:
        self.object: dict = obj if obj is not None else {}

    def type(self) -> str:
        return nested_string(self.object, "type")

    def status(self) -> str:
        return nested_string(self.object, "status")

    def reason(self) -> str:
        return nested_string(self.object, "reason")

    def message(self) -> str:
        return nested_string(self.object, "message")

    def _key(self) -> tuple[str, str, str, str]:
        return self.type(), self.status(), self.reason(), self.message()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Condition):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Condition({self.object!r})"


Summarizer = Callable[[dict, list[Condition], Summary], Summary]


def new_condition(condition_type: str, status: str, reason: str, message: str) -> Condition:
    return Condition(
        {"type": condition_type, "status": status, "reason": reason, "message": message}
    )


def _raw_conditions(obj: Any) -> list[dict]:
    conditions = nested_slice(obj, "status", "conditions")
    status_ann = nested_string(obj, "metadata", "annotations", "cattle.io/status")
    if status_ann:
        try:
            status = json.loads(status_ann)
        except ValueError:
            return conditions
        if status is None:
            return conditions
        if isinstance(status, dict):
            return conditions + nested_slice(status, "conditions")
    return conditions


def get_unstructured_conditions(obj: Any) -> list[Condition]:
    """Return the status conditions of ``obj``, including any from the status annotation."""
    return [Condition(raw) for raw in _raw_conditions(obj)]


def dedup_messages(messages: Iterable[str]) -> list[str]:
    """Strip messages and drop empty and repeated ones, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for message in messages:
        message = message.strip()
        if not message or message in seen:
            continue
        seen.add(message)
        result.append(message)
    return result


def is_kind(obj: Any, kind: str, *api_groups: str) -> bool:
    """Check an object's kind and API group.

    Without groups the apiVersion must be ``v1``. A group ending in ``/`` is a
    prefix of the apiVersion; an empty group means ``v1``; any other group
    matches when the apiVersion differs from it.
    """
    if nested_string(obj, "kind") != kind:
        return False
    api_version = nested_string(obj, "apiVersion")
    if not api_groups:
        return api_version == "v1"
    for group in api_groups:
        if group == "":
            if api_version == "v1":
                return True
        elif group.endswith("/"):
            if api_version.startswith(group):
                return True
        elif api_version != group:
            return True
    return False