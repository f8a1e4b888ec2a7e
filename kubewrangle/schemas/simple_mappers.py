"""Basic mappers that rename, drop, copy and restrict schema fields."""

from __future__ import annotations

import dataclasses
from typing import Optional

from kubewrangle.schemas.core import Mapper, Schemas
from kubewrangle.schemas.types import Field, Schema


def validate_field(field: str, schema: Schema) -> None:
    """Raise ``ValueError`` unless ``schema`` has a resource field named ``field``."""
    if field not in schema.resource_fields:
        raise ValueError(f"field {field} missing on schema {schema.id}")


@dataclasses.dataclass
class DefaultMapper(Mapper):
    """A mapper that only checks that its field exists on the schema."""

    field: str = ""

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        if self.field:
            validate_field(self.field, schema)


class EmptyMapper(Mapper):
    """A mapper that changes nothing."""


@dataclasses.dataclass
class Access(Mapper):
    """Sets create, update and write-only flags from letters ``c``, ``u`` and ``o``."""

    fields: dict[str, str] = dataclasses.field(default_factory=dict)
    optional: bool = False

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        for name, access in self.fields.items():
            try:
                validate_field(name, schema)
            except ValueError:
                if self.optional:
                    continue
                raise
            schema.resource_fields[name] = dataclasses.replace(
                schema.resource_fields[name],
                create="c" in access,
                update="u" in access,
                write_only="o" in access,
            )


@dataclasses.dataclass
class AliasField(Mapper):
    """Accepts alternative names for a field on input."""

    field: str = ""
    names: list[str] = dataclasses.field(default_factory=list)

    def to_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        for name in self.names:
            if name in data:
                data[self.field] = data.pop(name)

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        for name in self.names:
            schema.resource_fields[name] = Field()
        validate_field(self.field, schema)


def new_alias(field: str, *names: str) -> AliasField:
    """Create an :class:`AliasField` mapping ``names`` onto ``field``."""
    return AliasField(field=field, names=list(names))


@dataclasses.dataclass
class Drop(Mapper):
    """Removes a field from the external form."""

    field: str = ""
    optional: bool = False

    def from_internal(self, data: Optional[dict]) -> None:
        if data is not None:
            data.pop(self.field, None)

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        if self.field not in schema.resource_fields and not self.optional:
            raise ValueError(f"can not drop missing field {self.field} on {schema.id}")
        schema.resource_fields.pop(self.field, None)


@dataclasses.dataclass
class Copy(Mapper):
    """Exposes field ``from_`` under a second name ``to``."""

    from_: str = ""
    to: str = ""

    def from_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        if self.from_ in data:
            data[self.to] = data[self.from_]

    def to_internal(self, data: Optional[dict]) -> None:
        if data is None:
            return
        if self.to in data and self.from_ not in data:
            data[self.from_] = data[self.to]

    def modify_schema(self, schema: Schema, schemas: Schemas) -> None:
        source = schema.resource_fields.get(self.from_)
        if source is None:
            raise ValueError(f"field {self.from_} missing on schema {schema.id}")
        schema.resource_fields[self.to] = dataclasses.replace(source)