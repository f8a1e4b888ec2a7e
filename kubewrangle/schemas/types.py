"""Data types describing API schemas."""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Optional


@dataclass
class Field:
    """One field of a schema."""

    type: str = ""
    default: Any = None
    nullable: bool = False
    create: bool = False
    write_only: bool = False
    required: bool = False
    update: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None
    options: list[str] = field(default_factory=list)
    valid_chars: str = ""
    invalid_chars: str = ""
    description: str = ""
    code_name: str = ""


@dataclass
class Action:
    """An action's input and output types."""

    input: str = ""
    output: str = ""


@dataclass
class Schema:
    """The description of one API type."""

    id: str = ""
    description: str = ""
    code_name: str = ""
    code_name_plural: str = ""
    pkg_name: str = ""
    plural_name: str = ""
    resource_methods: list[str] = field(default_factory=list)
    resource_fields: dict[str, Field] = field(default_factory=dict)
    resource_actions: dict[str, Action] = field(default_factory=dict)
    collection_methods: list[str] = field(default_factory=list)
    collection_fields: dict[str, Field] = field(default_factory=dict)
    collection_actions: dict[str, Action] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)
    internal_schema: Optional[Schema] = None
    mapper: Any = None

    def deep_copy(self) -> Schema:
        """Return a copy whose fields, actions and attributes are independent of this one.

        The mapper is shared with the original.
        """
        result = copy.copy(self)
        result.resource_methods = list(self.resource_methods)
        result.collection_methods = list(self.collection_methods)
        result.resource_fields = {k: replace(v) for k, v in self.resource_fields.items()}
        result.resource_actions = {k: replace(v) for k, v in self.resource_actions.items()}
        result.collection_fields = {k: replace(v) for k, v in self.collection_fields.items()}
        result.collection_actions = {
            k: replace(v) for k, v in self.collection_actions.items()
        }
        result.attributes = dict(self.attributes)
        if self.internal_schema is not None:
            result.internal_schema = self.internal_schema.deep_copy()
        return result

    def must_customize_field(self, name: str, f: Callable[[Field], Field]) -> Schema:
        """Replace field ``name`` with ``f(field)``; raise ``KeyError`` if it is missing."""
        try:
            current = self.resource_fields[name]
        except KeyError:
            raise KeyError(f"Failed to find field {name} on schema {self.id}") from None
        self.resource_fields[name] = f(current)
        return self