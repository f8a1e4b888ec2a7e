"""Mappers that restructure objects: moves, embeds, enums and conditional mapping."""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

from kubewrangle.kv import split
from kubewrangle.schemas.core import Mapper, Mappers, Schemas
from kubewrangle.schemas.definition import is_array_type, sub_type
from kubewrangle.schemas.simple_mappers import (
    Access,
    DefaultMapper,
    Drop,
    EmptyMapper,
    validate_field,
)
from kubewrangle.schemas.types import Field, Schema


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


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def _sub_map(data: Any, name: str) -> Optional[dict]:
    if not isinstance(data, dict):
        return None
    value = data.get(name)
    return value if isinstance(value, dict) else None


def _remove_value(data: Any, path: list[str]) -> tuple[Any, bool]:
    parent = data
    for key in path[:-1]:
        parent = parent.get(key) if isinstance(parent, dict) else None
    if not isinstance(parent, dict) or path[-1] not in parent:
        return None, False
    return parent.pop(path[-1]), True


def _put_value(data: dict, value: Any, path: list[str]) -> None:
    current = data
    for key in path[:-1]:
        nxt = current.get(key)
        if not isinstance(nxt, dict):
            nxt = {}
            current[key] = nxt
        current = nxt
    current[path[-1]] = value


@dataclasses.dataclass
class ConditionalMapper(Mapper):
    """Applies ``mapper`` only to data whose ``field`` equals ``value``."""

    field: str = ""
    value: Any = None
    mapper: Mapper = dataclasses.field(default_factory=EmptyMapper)

    def _matches(self, data: Optional[dict]) -> bool:
        current = data.get(self.field) if data is not None else None
        return current == self.value

    def from_internal(self, data: Optional[dict]) -> None:
        if self._matches(data):
            self.mapper.from_internal(data)

    def to_internal(self, data: Optional[dict]) -> None:
        if self._matches(data):
            self.mapper.to_internal(data)

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        self.mapper.modify_schema(schema, schemas)


@dataclasses.dataclass
class Exists(Mapper):
    """Enables ``mapper`` only when the schema has ``field``."""

    field: str = ""
    mapper: Mapper = dataclasses.field(default_factory=EmptyMapper)
    _enabled: bool = dataclasses.field(default=False, init=False, repr=False)

    def from_internal(self, data: Optional[dict]) -> None:
        if self._enabled:
            self.mapper.from_internal(data)

    def to_internal(self, data: Optional[dict]) -> None:
        if self._enabled:
            self.mapper.to_internal(data)

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        if self.field in schema.resource_fields:
            self._enabled = True
            self.mapper.modify_schema(schema, schemas)


@dataclasses.dataclass
class SetValue(Mapper):
    """Forces a field to fixed values in the internal and external forms."""

    field: str = ""
    internal_value: Any = None
    external_value: Any = None

    def from_internal(self, data: Optional[dict]) -> None:
        if data is not None and self.external_value is not None:
            data[self.field] = self.external_value

    def to_internal(self, data: Optional[dict]) -> None:
        if data is not None and self.internal_value is not None:
            data[self.field] = self.internal_value

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        validate_field(self.field, schema)


def _normalize(value: str) -> str:
    return value.replace("_", "").replace("-", "").lower()


@dataclasses.dataclass
class Enum(DefaultMapper):
    """Maps loosely spelled input values onto their canonical form."""

    vals: dict[str, str] = dataclasses.field(default_factory=dict)

    def to_internal(self, data: Optional[dict]) -> None:
        if data is None or self.field not in data:
            return
        value = data[self.field]
        new_value = self.vals.get(_normalize(_to_string(value)))
        if new_value is None:
            raise ValueError(f"{value} is not a valid value for field {self.field}")
        data[self.field] = new_value


def new_enum(field: str, *vals: str) -> Enum:
    """Create an :class:`Enum`; each value is ``canonical`` or ``alias=canonical``."""
    mapping: dict[str, str] = {}
    for v in vals:
        key, canonical = v, v
        if "=" in v:
            key, canonical = split(v, "=")
        mapping[_normalize(key)] = canonical
    return Enum(field=field, vals=mapping)


@dataclasses.dataclass
class Embed(Mapper):
    """Lifts the fields of a nested object up into the outer object."""

    field: str = ""
    optional: bool = False
    read_only: bool = False
    ignore: list[str] = dataclasses.field(default_factory=list)
    empty_value_ok: bool = False
    _ignore_override: bool = dataclasses.field(default=False, init=False, repr=False)
    _embedded_fields: list[str] = dataclasses.field(
        default_factory=list, init=False, repr=False
    )

    def from_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        sub = _sub_map(data, self.field) or {}
        for name in self._embedded_fields:
            if name in sub:
                data[name] = sub[name]
        data.pop(self.field, None)

    def to_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        sub: dict[str, Any] = {}
        for name in self._embedded_fields:
            if name in data:
                sub[name] = data[name]
            data.pop(name, None)
        if not sub:
            if self.empty_value_ok:
                data[self.field] = None
            return
        data[self.field] = sub

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        try:
            validate_field(self.field, schema)
        except ValueError:
            if self.optional:
                return
            raise

        self._embedded_fields = []

        embedded_id = schema.resource_fields[self.field].type
        embedded = schemas.schema(embedded_id)
        if embedded is None:
            if self.optional:
                return
            raise ValueError(f"failed to find schema {embedded_id} for embedding")

        delete_field = True
        for name, field in list(embedded.resource_fields.items()):
            if name in self.ignore:
                continue
            if name == self.field:
                delete_field = False
            elif not self._ignore_override and name in schema.resource_fields:
                raise ValueError(
                    f"embedding field {self.field} on {schema.id} will overwrite the field {name}"
                )
            copied = dataclasses.replace(field)
            if self.read_only:
                copied.create = False
                copied.update = False
            schema.resource_fields[name] = copied
            self._embedded_fields.append(name)

        if delete_field:
            schema.resource_fields.pop(self.field, None)


def _get_field(
    schema: Schema, schemas: Schemas, target: str
) -> tuple[Schema, str, Optional[Field]]:
    parts = target.split("/")
    for part in parts[:-1]:
        current = schema.resource_fields.get(part)
        field_type = current.type if current is not None else ""
        if is_array_type(field_type):
            field_type = sub_type(field_type)
        sub = schemas.schema(field_type)
        if sub is None:
            raise ValueError(f"failed to find field or schema for {part} on {schema.id}")
        schema = sub
    name = parts[-1]
    return schema, name, schema.resource_fields.get(name)


@dataclasses.dataclass
class Move(Mapper):
    """Moves a field to another name or ``/`` separated path."""

    optional: bool = False
    from_: str = ""
    to: str = ""
    code_name: str = ""
    dest_defined: bool = False
    no_delete_from_field: bool = False

    def from_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        value, ok = _remove_value(data, self.from_.split("/"))
        if ok:
            _put_value(data, value, self.to.split("/"))

    def to_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        value, ok = _remove_value(data, self.to.split("/"))
        if ok:
            _put_value(data, value, self.from_.split("/"))

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        from_schema, _, from_field = _get_field(schema, schemas, self.from_)
        if from_field is None:
            if self.optional:
                return
            raise ValueError(f"failed to find field {self.from_} on schema {schema.id}")

        to_schema, to_name, _ = _get_field(schema, schemas, self.to)
        if (
            to_name in to_schema.resource_fields
            and "/" not in self.to
            and not self.dest_defined
        ):
            raise ValueError(f"field {self.to} already exists on schema {schema.id}")

        if not self.no_delete_from_field:
            from_schema.resource_fields.pop(self.from_, None)

        if not self.dest_defined:
            moved = dataclasses.replace(from_field)
            moved.code_name = self.code_name or _capitalize(to_name)
            to_schema.resource_fields[to_name] = moved


@dataclasses.dataclass
class SliceToMap(Mapper):
    """Exposes a list of objects as a map keyed by one of their fields."""

    field: str = ""
    key: str = ""

    def from_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        items = data.get(self.field)
        result: dict[str, Any] = {}
        if isinstance(items, list):
            for item in items:
                if not isinstance(item, dict):
                    continue
                name = item.get(self.key)
                item.pop(self.key, None)
                result[name if isinstance(name, str) else ""] = item
        if result:
            data[self.field] = result

    def to_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        items = _sub_map(data, self.field)
        result: list[Any] = []
        for name, item in (items or {}).items():
            if isinstance(item, dict):
                item[self.key] = name
                result.append(item)
        if result or items is not None:
            data[self.field] = result

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        validate_field(self.field, schema)
        sub_schema, sub_name, _ = _get_field(schema, schemas, f"{self.field}/{self.key}")

        field = schema.resource_fields[self.field]
        if not is_array_type(field.type):
            raise ValueError(f"field {self.field} on {schema.id} is not an array")

        schema.resource_fields[self.field] = dataclasses.replace(
            field, type="map[" + sub_type(field.type) + "]"
        )
        sub_schema.resource_fields.pop(sub_name, None)


def new_metadata_mapper() -> Mappers:
    """Return the mappers that flatten object metadata into its external form."""
    return Mappers(
        [
            Move(from_="name", to="id", code_name="ID"),
            Drop(field="namespace"),
            Drop(field="generateName"),
            Move(from_="uid", to="uuid", code_name="UUID"),
            Drop(field="resourceVersion"),
            Drop(field="generation"),
            Move(from_="creationTimestamp", to="created"),
            Move(from_="deletionTimestamp", to="removed"),
            Drop(field="deletionGracePeriodSeconds"),
            Drop(field="initializers"),
            Drop(field="finalizers"),
            Drop(field="managedFields"),
            Drop(field="ownerReferences"),
            Drop(field="clusterName"),
            Drop(field="selfLink"),
            Access(fields={"labels": "cu", "annotations": "cu"}),
        ]
    )