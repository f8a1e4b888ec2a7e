"""Group, version and kind identifiers of API objects."""

from __future__ import annotations

import json
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GroupKind:
    """An API group and kind."""

    group: str = ""
    kind: str = ""

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(frozen=True)
class GroupVersionKind:
    """An API group, version and kind.

    A class can declare the kind of its instances by setting a class
    attribute ``group_version_kind`` to an instance of this class.
    """

    group: str = ""
    version: str = ""
    kind: str = ""

    @classmethod
    def from_api_version_and_kind(cls, api_version: str, kind: str) -> GroupVersionKind:
        """Build from an ``apiVersion`` string such as ``apps/v1``."""
        parsed = _parse_group_version(api_version)
        if parsed is None:
            return cls(kind=kind)
        group, version = parsed
        return cls(group, version, kind)

    def to_api_version_and_kind(self) -> tuple[str, str]:
        """Return the ``apiVersion`` string and the kind."""
        api_version = f"{self.group}/{self.version}" if self.group else self.version
        return api_version, self.kind

    def group_kind(self) -> GroupKind:
        return GroupKind(self.group, self.kind)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


def _parse_group_version(api_version: str) -> tuple[str, str] | None:
    if not api_version or api_version == "/":
        return "", ""
    count = api_version.count("/")
    if count == 0:
        return "", api_version
    if count == 1:
        group, _, version = api_version.partition("/")
        return group, version
    return None


def _object_kind(obj: Any) -> GroupVersionKind:
    if isinstance(obj, Mapping):
        api_version = obj.get("apiVersion") or ""
        kind = obj.get("kind") or ""
    else:
        api_version = getattr(obj, "api_version", "") or ""
        kind = getattr(obj, "kind", "") or ""
    return GroupVersionKind.from_api_version_and_kind(str(api_version), str(kind))


def _registered_kind(obj: Any) -> GroupVersionKind | None:
    declared = getattr(type(obj), "group_version_kind", None)
    return declared if isinstance(declared, GroupVersionKind) else None


def detect(data: str | bytes) -> tuple[GroupVersionKind, bool]:
    """Read the kind of a JSON document; the flag says whether kind and version are both set."""
    document = json.loads(data)
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError("object metadata must be a JSON object")
    api_version = document.get("apiVersion") or ""
    kind = document.get("kind") or ""
    if not isinstance(api_version, str) or not isinstance(kind, str):
        raise ValueError("apiVersion and kind must be strings")
    result = GroupVersionKind.from_api_version_and_kind(api_version, kind)
    return result, bool(result.kind and result.version)


def get(obj: Any) -> GroupVersionKind:
    """Return the kind set on ``obj``, or the kind its class declares."""
    result = _object_kind(obj)
    if result.kind:
        return result
    declared = _registered_kind(obj)
    if declared is None:
        raise LookupError(f"failed to find gvk for {type(obj).__name__}")
    return declared


def set_gvk(*objs: Any) -> None:
    """Fill in ``apiVersion`` and ``kind`` on objects that lack a kind."""
    for obj in objs:
        if _object_kind(obj).kind:
            continue
        declared = _registered_kind(obj)
        if declared is None:
            raise LookupError(f"failed to find gvk for {type(obj).__name__}")
        api_version, kind = declared.to_api_version_and_kind()
        if isinstance(obj, MutableMapping):
            obj["apiVersion"] = api_version
            obj["kind"] = kind
        else:
            obj.api_version = api_version
            obj.kind = kind