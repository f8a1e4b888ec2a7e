"""Schema registry and the mapper interface."""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterable
from dataclasses import fields
from typing import Any, Optional

from kubewrangle.merr import new_errors
from kubewrangle.name import guess_plural_name
from kubewrangle.schemas.definition import is_array_type, is_map_type, sub_type
from kubewrangle.schemas.types import Schema

MapperFactory = Callable[[], "Mapper"]
FieldMapperFactory = Callable[..., "Mapper"]


class Mapper:
    """Converts data between its internal and external form and adjusts schemas.

    Every hook does nothing by default; subclasses override what they need.
    ``to_internal`` raises on invalid data.
    """

    def from_internal(self, data: Optional[dict]) -> None:
        """Rewrite ``data`` from the internal form to the external one."""

    def to_internal(self, data: Optional[dict]) -> None:
        """Rewrite ``data`` from the external form to the internal one."""

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        """Adjust ``schema`` to describe the external form."""


class Mappers(list, Mapper):
    """A sequence of mappers applied as one."""

    def from_internal(self, data: Optional[dict]) -> None:
        for mapper in self:
            mapper.from_internal(data)

    def to_internal(self, data: Optional[dict]) -> None:
        """Apply the mappers in reverse order, raising every collected error at the end."""
        errors: list[BaseException] = []
        for mapper in reversed(self):
            try:
                mapper.to_internal(data)
            except Exception as exc:
                errors.append(exc)
        err = new_errors(*errors)
        if err is not None:
            raise err

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        for mapper in self:
            mapper.modify_schema(schema, schemas)


def _sub_map(data: Any, name: str) -> Optional[dict]:
    if not isinstance(data, dict):
        return None
    value = data.get(name)
    return value if isinstance(value, dict) else None


def _sub_slice(data: Any, name: str) -> list[dict]:
    if not isinstance(data, dict):
        return []
    value = data.get(name)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _map_values(data: Optional[dict]) -> list[dict]:
    if data is None:
        return []
    return [value for value in data.values() if isinstance(value, dict)]


class _TypeMapper(Mapper):
    """Applies a schema's own mappers and those of its nested field types."""

    def __init__(self, mappers: Iterable[Mapper], root: bool) -> None:
        self.mappers = Mappers(mappers)
        self.root = root
        self.type_name = ""
        self.sub_schemas: dict[str, Schema] = {}
        self.sub_array_schemas: dict[str, Schema] = {}
        self.sub_map_schemas: dict[str, Schema] = {}

    def from_internal(self, data: Optional[dict]) -> None:
        for field_name, schema in self.sub_schemas.items():
            sub = _sub_map(data, field_name)
            if schema.mapper is not None and sub is not None:
                schema.mapper.from_internal(sub)

        for field_name, schema in self.sub_map_schemas.items():
            if schema.mapper is None:
                continue
            for item in _map_values(_sub_map(data, field_name)):
                schema.mapper.from_internal(item)

        for field_name, schema in self.sub_array_schemas.items():
            if schema.mapper is None:
                continue
            for item in _sub_slice(data, field_name):
                schema.mapper.from_internal(item)

        self.mappers.from_internal(data)

    def to_internal(self, data: Optional[dict]) -> None:
        errors: list[BaseException] = []

        def attempt(mapper: Mapper, item: Optional[dict]) -> None:
            try:
                mapper.to_internal(item)
            except Exception as exc:
                errors.append(exc)

        attempt(self.mappers, data)

        for field_name, schema in self.sub_array_schemas.items():
            if schema.mapper is None:
                continue
            for item in _sub_slice(data, field_name):
                attempt(schema.mapper, item)

        for field_name, schema in self.sub_map_schemas.items():
            if schema.mapper is None:
                continue
            for item in _map_values(_sub_map(data, field_name)):
                attempt(schema.mapper, item)

        for field_name, schema in self.sub_schemas.items():
            sub = _sub_map(data, field_name)
            if schema.mapper is not None and sub is not None:
                attempt(schema.mapper, sub)

        err = new_errors(*errors)
        if err is not None:
            raise err

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        self.sub_schemas = {}
        self.sub_array_schemas = {}
        self.sub_map_schemas = {}
        self.type_name = schema.id

        mapper_schema = schema.internal_schema or schema
        for name, field in mapper_schema.resource_fields.items():
            field_type = field.type
            target = self.sub_schemas
            if is_array_type(field_type):
                field_type = sub_type(field_type)
                target = self.sub_array_schemas
            elif is_map_type(field_type):
                field_type = sub_type(field_type)
                target = self.sub_map_schemas

            sub = schemas.schema(field_type)
            if sub is not None:
                target[name] = sub

        self.mappers.modify_schema(schema, schemas)


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def _can_list(schema: Schema) -> bool:
    return "GET" in schema.collection_methods


class Schemas:
    """A registry of schemas with the mappers attached to them."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._schemas_by_id: dict[str, Schema] = {}
        self._schemas: list[Schema] = []
        self.mappers: dict[str, list[Mapper]] = {}
        self.field_mappers: dict[str, FieldMapperFactory] = {}
        self.type_names: dict[type, str] = {}
        self.processing_types: dict[type, Schema] = {}
        self.default_mapper: Optional[MapperFactory] = None
        self.default_post_mapper: Optional[MapperFactory] = None

    def init(self, init_func: Callable[[Schemas], Schemas]) -> Schemas:
        return init_func(self)

    def add_schemas(self, schemas: Schemas) -> Schemas:
        """Add every schema of ``schemas``, raising the collected errors at the end."""
        errors: list[BaseException] = []
        for schema in schemas.all_schemas():
            try:
                self.add_schema(schema)
            except Exception as exc:
                errors.append(exc)
        err = new_errors(*errors)
        if err is not None:
            raise err
        return self

    def add_schema(self, schema: Schema) -> Schemas:
        """Register a copy of ``schema``, filling in defaults and mappers.

        A schema with the same id is updated in place.
        """
        with self._lock:
            stored = copy.copy(schema)
            self._setup_defaults(stored)
            existing = self._schemas_by_id.get(stored.id)
            if existing is not None:
                for f in fields(Schema):
                    setattr(existing, f.name, getattr(stored, f.name))
            else:
                self._schemas_by_id[stored.id] = stored
                self._schemas.append(stored)
        return self

    def remove_schema(self, schema: Schema) -> Schemas:
        """Remove the id lookup entry of ``schema``."""
        with self._lock:
            self._schemas_by_id.pop(schema.id, None)
        return self

    def _setup_defaults(self, schema: Schema) -> None:
        if not schema.id:
            raise ValueError(f"ID is not set on schema: {schema}")
        if not schema.plural_name:
            schema.plural_name = guess_plural_name(schema.id)
        if not schema.code_name:
            schema.code_name = _capitalize(schema.id)
        if not schema.code_name_plural:
            schema.code_name_plural = guess_plural_name(schema.code_name)
        self._assign_mappers(schema)

    def _assign_mappers(self, schema: Schema) -> None:
        if schema.mapper is not None:
            return

        mappers = list(self.mappers.get(schema.id, []))
        root = _can_list(schema)
        if root:
            if self.default_mapper is not None:
                mappers.insert(0, self.default_mapper())
            if self.default_post_mapper is not None:
                mappers.append(self.default_post_mapper())

        if mappers:
            schema.internal_schema = schema.deep_copy()

        mapper = _TypeMapper(mappers, root=root)
        mapper.modify_schema(schema, self)
        schema.mapper = mapper

    def add_mapper(self, schema_id: str, mapper: Mapper) -> Schemas:
        self.mappers.setdefault(schema_id, []).append(mapper)
        return self

    def add_field_mapper(self, name: str, factory: FieldMapperFactory) -> Schemas:
        self.field_mappers[name] = factory
        return self

    def schema(self, name: str) -> Optional[Schema]:
        """Find a schema by id, then case-insensitively by id or plural name."""
        with self._lock:
            found = self._schemas_by_id.get(name)
            if found is not None:
                return found
            wanted = name.casefold()
            for check in self._schemas:
                if check.id.casefold() == wanted or check.plural_name.casefold() == wanted:
                    return check
        return None

    def all_schemas(self) -> list[Schema]:
        return list(self._schemas)

    def schemas_by_id(self) -> dict[str, Schema]:
        return self._schemas_by_id


def new_schemas(*schemas: Schemas) -> Schemas:
    """Create a registry holding the schemas of every given registry."""
    result = Schemas()
    errors: list[BaseException] = []
    for other in schemas:
        try:
            result.add_schemas(other)
        except Exception as exc:
            errors.append(exc)
    err = new_errors(*errors)
    if err is not None:
        raise err
    return result