import pytest

from kubewrangle.schemas.core import Schemas
from kubewrangle.schemas.mappers import (
    ConditionalMapper,
    Embed,
    Exists,
    Move,
    SetValue,
    SliceToMap,
    new_enum,
    new_metadata_mapper,
)
from kubewrangle.schemas.simple_mappers import Drop
from kubewrangle.schemas.types import Field, Schema


def _registry_with(*schemas):
    registry = Schemas()
    for schema in schemas:
        registry.add_schema(schema)
    return registry


def test_conditional_mapper_applies_only_on_match():
    mapper = ConditionalMapper(field="kind", value="a", mapper=Drop(field="x"))
    matching = {"kind": "a", "x": 1}
    other = {"kind": "b", "x": 1}
    mapper.from_internal(matching)
    mapper.from_internal(other)
    assert matching == {"kind": "a"}
    assert other == {"kind": "b", "x": 1}


def test_conditional_mapper_to_internal_delegates():
    mapper = ConditionalMapper(field="kind", value="a", mapper=new_enum("color", "Red"))
    with pytest.raises(ValueError):
        mapper.to_internal({"kind": "a", "color": "green"})
    data = {"kind": "b", "color": "green"}
    mapper.to_internal(data)
    assert data["color"] == "green"


def test_exists_disabled_without_field():
    mapper = Exists(field="x", mapper=Drop(field="x"))
    mapper.modify_schema(Schema(id="s", resource_fields={"y": Field()}), Schemas())
    data = {"x": 1}
    mapper.from_internal(data)
    assert data == {"x": 1}


def test_exists_enabled_with_field():
    mapper = Exists(field="x", mapper=Drop(field="x"))
    schema = Schema(id="s", resource_fields={"x": Field()})
    mapper.modify_schema(schema, Schemas())
    data = {"x": 1, "y": 2}
    mapper.from_internal(data)
    assert data == {"y": 2}
    assert "x" not in schema.resource_fields


def test_set_value():
    mapper = SetValue(field="mode", internal_value="int", external_value="ext")
    data = {}
    mapper.from_internal(data)
    assert data == {"mode": "ext"}
    mapper.to_internal(data)
    assert data == {"mode": "int"}
    untouched = {"mode": "keep"}
    SetValue(field="mode").from_internal(untouched)
    assert untouched == {"mode": "keep"}
    with pytest.raises(ValueError):
        mapper.modify_schema(Schema(id="s"), Schemas())


def test_enum_normalizes_values():
    mapper = new_enum("color", "Red", "dark_blue=navy")
    data = {"color": "RED"}
    mapper.to_internal(data)
    assert data["color"] == "Red"
    data = {"color": "dark-blue"}
    mapper.to_internal(data)
    assert data["color"] == "navy"
    empty = {}
    mapper.to_internal(empty)
    assert empty == {}


def test_enum_invalid_value_raises():
    mapper = new_enum("color", "Red")
    with pytest.raises(ValueError, match="not a valid value for field color"):
        mapper.to_internal({"color": "purple"})
    with pytest.raises(ValueError):
        mapper.modify_schema(Schema(id="s"), Schemas())


def _embed_setup():
    inner = Schema(id="inner", resource_fields={"a": Field(type="string", create=True),
                                                "b": Field(type="int", create=True)})
    registry = _registry_with(inner)
    outer = Schema(id="outer", resource_fields={"spec": Field(type="inner"),
                                                "name": Field(type="string")})
    return registry, outer


def test_embed_modify_schema_and_round_trip():
    registry, outer = _embed_setup()
    mapper = Embed(field="spec")
    mapper.modify_schema(outer, registry)
    assert set(outer.resource_fields) == {"a", "b", "name"}

    data = {"spec": {"a": "x", "b": 2}, "name": "n"}
    mapper.from_internal(data)
    assert data == {"a": "x", "b": 2, "name": "n"}
    mapper.to_internal(data)
    assert data == {"spec": {"a": "x", "b": 2}, "name": "n"}


def test_embed_read_only_and_empty_value():
    registry, outer = _embed_setup()
    mapper = Embed(field="spec", read_only=True, empty_value_ok=True)
    mapper.modify_schema(outer, registry)
    assert outer.resource_fields["a"].create is False
    data = {"name": "n"}
    mapper.to_internal(data)
    assert data == {"name": "n", "spec": None}


def test_embed_conflict_and_optional():
    registry, outer = _embed_setup()
    outer.resource_fields["a"] = Field(type="string")
    with pytest.raises(ValueError, match="will overwrite"):
        Embed(field="spec").modify_schema(outer, registry)
    plain = Schema(id="plain", resource_fields={"name": Field()})
    Embed(field="spec", optional=True).modify_schema(plain, registry)
    assert set(plain.resource_fields) == {"name"}


def test_move_data_round_trip():
    mapper = Move(from_="spec/name", to="id")
    data = {"spec": {"name": "x"}}
    mapper.from_internal(data)
    assert data == {"spec": {}, "id": "x"}
    mapper.to_internal(data)
    assert data == {"spec": {"name": "x"}}


def test_move_modify_schema():
    schema = Schema(id="s", resource_fields={"name": Field(type="string")})
    Move(from_="name", to="id", code_name="ID").modify_schema(schema, Schemas())
    assert set(schema.resource_fields) == {"id"}
    assert schema.resource_fields["id"].code_name == "ID"
    assert schema.resource_fields["id"].type == "string"


def test_move_errors():
    schema = Schema(id="s", resource_fields={"name": Field(), "id": Field()})
    with pytest.raises(ValueError, match="already exists"):
        Move(from_="name", to="id").modify_schema(schema, Schemas())
    with pytest.raises(ValueError, match="failed to find field"):
        Move(from_="missing", to="other").modify_schema(schema, Schemas())
    Move(from_="missing", to="other", optional=True).modify_schema(schema, Schemas())
    assert set(schema.resource_fields) == {"name", "id"}


def test_slice_to_map_round_trip():
    mapper = SliceToMap(field="ports", key="name")
    data = {"ports": [{"name": "http", "port": 80}]}
    mapper.from_internal(data)
    assert data == {"ports": {"http": {"port": 80}}}
    mapper.to_internal(data)
    assert data == {"ports": [{"port": 80, "name": "http"}]}


def test_slice_to_map_modify_schema():
    port = Schema(id="port", resource_fields={"name": Field(type="string"),
                                              "port": Field(type="int")})
    registry = _registry_with(port)
    outer = Schema(id="svc", resource_fields={"ports": Field(type="array[port]")})
    SliceToMap(field="ports", key="name").modify_schema(outer, registry)
    assert outer.resource_fields["ports"].type == "map[port]"
    assert "name" not in registry.schema("port").resource_fields

    bad = Schema(id="svc", resource_fields={"ports": Field(type="port")})
    with pytest.raises(ValueError, match="not an array"):
        SliceToMap(field="ports", key="port").modify_schema(bad, registry)


METADATA_FIELDS = [
    "name", "namespace", "generateName", "uid", "resourceVersion", "generation",
    "creationTimestamp", "deletionTimestamp", "deletionGracePeriodSeconds",
    "initializers", "finalizers", "managedFields", "ownerReferences", "clusterName",
    "selfLink", "labels", "annotations",
]


def test_metadata_mapper_schema():
    schema = Schema(id="objectMeta",
                    resource_fields={name: Field(type="string") for name in METADATA_FIELDS})
    new_metadata_mapper().modify_schema(schema, Schemas())
    assert set(schema.resource_fields) == {
        "id", "uuid", "created", "removed", "labels", "annotations"
    }
    assert schema.resource_fields["id"].code_name == "ID"
    assert schema.resource_fields["uuid"].code_name == "UUID"
    assert schema.resource_fields["labels"].create is True
    assert schema.resource_fields["labels"].update is True


def test_metadata_mapper_data():
    data = {"name": "n", "namespace": "ns", "uid": "u", "creationTimestamp": "t"}
    new_metadata_mapper().from_internal(data)
    assert data == {"id": "n", "uuid": "u", "created": "t"}