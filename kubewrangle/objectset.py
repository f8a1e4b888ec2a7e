"""Collections of API objects indexed by kind and key."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kubewrangle.gvk import GroupKind, GroupVersionKind, get
from kubewrangle.merr import new_errors
from kubewrangle.stringset import StringSet


def _name_and_namespace(obj: Any) -> tuple[str, str]:
    if isinstance(obj, Mapping):
        metadata = obj.get("metadata") or {}
        if not isinstance(metadata, Mapping):
            raise TypeError(f"{type(obj).__name__} has invalid metadata")
        return str(metadata.get("name") or ""), str(metadata.get("namespace") or "")
    metadata = getattr(obj, "metadata", None)
    source = metadata if metadata is not None else obj
    if isinstance(source, Mapping):
        return str(source.get("name") or ""), str(source.get("namespace") or "")
    try:
        name = source.name
    except AttributeError:
        raise TypeError(f"{type(obj).__name__} does not carry object metadata") from None
    return str(name or ""), str(getattr(source, "namespace", "") or "")


@dataclass(frozen=True)
class ObjectKey:
    """The namespace and name of an object."""

    name: str = ""
    namespace: str = ""

    @classmethod
    def from_object(cls, obj: Any) -> ObjectKey:
        name, namespace = _name_and_namespace(obj)
        return cls(name=name, namespace=namespace)

    def __str__(self) -> str:
        if not self.namespace:
            return self.name
        return f"{self.namespace}/{self.name}"


class ObjectByKey(dict):
    """Objects keyed by :class:`ObjectKey`."""

    def namespaces(self) -> list[str]:
        """Return the distinct namespaces of the keys."""
        found = StringSet()
        found.add(*(key.namespace for key in self))
        return found.values()


class ObjectSet:
    """An ordered set of objects grouped by kind, collecting errors as it goes."""

    def __init__(self, *objs: Any) -> None:
        self._errs: list[BaseException] = []
        self._objects: dict[GroupVersionKind, ObjectByKey] = {}
        self._objects_by_gk: dict[GroupKind, ObjectByKey] = {}
        self._order: list[Any] = []
        self._gvk_order: list[GroupVersionKind] = []
        self._gvk_seen: set[GroupVersionKind] = set()
        self.add(*objs)

    def add(self, *objs: Any) -> ObjectSet:
        """Add objects; objects that cannot be identified are recorded as errors."""
        for obj in objs:
            self._add(obj)
        return self

    def _add(self, obj: Any) -> None:
        if obj is None:
            return
        try:
            key = ObjectKey.from_object(obj)
            gvk = get(obj)
        except (LookupError, TypeError, ValueError) as exc:
            err = ValueError(f"failed to add {type(obj).__name__}: {exc}")
            err.__cause__ = exc
            self._errs.append(err)
            return

        self._objects.setdefault(gvk, ObjectByKey())[key] = obj
        self._objects_by_gk.setdefault(gvk.group_kind(), ObjectByKey())[key] = obj
        self._order.append(obj)
        if gvk not in self._gvk_seen:
            self._gvk_seen.add(gvk)
            self._gvk_order.append(gvk)

    def add_err(self, err: BaseException) -> None:
        self._errs.append(err)

    def err(self) -> BaseException | None:
        """Return the collected errors as one error, or ``None``."""
        return new_errors(*self._errs)

    def contains(self, gk: GroupKind, key: ObjectKey) -> bool:
        return key in self._objects_by_gk.get(gk, {})

    def all(self) -> list[Any]:
        """Return the objects in insertion order."""
        return list(self._order)

    def objects_by_gvk(self) -> dict[GroupVersionKind, ObjectByKey]:
        return self._objects

    def gvks(self) -> list[GroupVersionKind]:
        return self.gvk_order()

    def gvk_order(self, *known: GroupVersionKind) -> list[GroupVersionKind]:
        """Kinds in insertion order, followed by unseen ``known`` kinds sorted by name."""
        rest = sorted((g for g in known if g not in self._gvk_seen), key=str)
        return self._gvk_order + rest

    def namespaces(self) -> list[str]:
        """Return all distinct namespaces of the objects in the set."""
        found = StringSet()
        for by_key in self._objects.values():
            found.add(*(key.namespace for key in by_key))
        return found.values()

    def __len__(self) -> int:
        """The number of distinct kinds in the set."""
        return len(self._objects)