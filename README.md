# kubewrangle

Small helpers for working with Kubernetes-style objects held as plain Python
dictionaries. It needs only the standard library.

## What is in it

- `kubewrangle.kv`: splitting `key=value` and `namespace/name` strings
  (`split`, `rsplit`, `split_last`, `split_map`, `split_map_from_slice`).
- `kubewrangle.merr`: collecting several errors into one (`new_errors`,
  `Errors`).
- `kubewrangle.name`: plural guessing and length-safe resource names
  (`guess_plural_name`, `limit`, `hex_prefix`, `safe_concat_name`).
- `kubewrangle.randomtoken`: random 54-character tokens from an alphabet
  without vowels or look-alike digits (`generate`).
- `kubewrangle.stringset` (`StringSet`) and `kubewrangle.seen` (`Seen`):
  simple string sets.
- `kubewrangle.resolvehome`: expands `$HOME`, `${HOME}` and `~` in a string
  (`resolve`).
- `kubewrangle.gvk`: group/version/kind values and their detection from JSON
  or from objects (`GroupVersionKind`, `GroupKind`, `detect`, `get`,
  `set_gvk`). A class can declare its kind with a `group_version_kind` class
  attribute.
- `kubewrangle.objectset`: ordered sets of objects keyed by kind and
  namespace/name, collecting errors for objects that cannot be identified
  (`ObjectSet`, `ObjectKey`, `ObjectByKey`).
- `kubewrangle.summary.model`: the `Summary`, `Condition` and `Relationship`
  types and helpers for reading nested dictionaries (`nested_value`,
  `nested_string`, `nested_map`, `nested_slice`, `is_kind`).
- `kubewrangle.summary.coretypes` and `kubewrangle.summary.summarizers`:
  compute an object's state, whether it is in error or still changing, its
  messages and the objects it relates to (`summarize`,
  `normalize_conditions`, and the individual `check_*` summarizers).
- `kubewrangle.schemas.types`: `Schema`, `Field` and `Action`.
- `kubewrangle.schemas.definition`: parsing type names such as
  `array[string]` and `map[int]`.
- `kubewrangle.schemas.core`: the schema registry (`Schemas`, `new_schemas`)
  and the `Mapper` / `Mappers` interface.
- `kubewrangle.schemas.simple_mappers` and `kubewrangle.schemas.mappers`:
  field mappers (`DefaultMapper`, `EmptyMapper`, `Access`, `AliasField`,
  `Drop`, `Copy`, `ConditionalMapper`, `Exists`, `SetValue`, `Enum`,
  `Embed`, `Move`, `SliceToMap`, and `new_alias`, `new_enum`,
  `new_metadata_mapper`).

## Install

```
pip install .
```

## Examples

```python
from kubewrangle.kv import split
from kubewrangle.name import guess_plural_name, safe_concat_name

split("key = value", "=")             # ("key", "value")
guess_plural_name("Policy")           # "Policies"
safe_concat_name("a" * 40, "b" * 40)  # shortened to 63 characters, with a hash suffix
```

Summarising an object:

```python
from kubewrangle.summary.summarizers import summarize

pod = {
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {"name": "web", "namespace": "default"},
    "status": {"conditions": [
        {"type": "Ready", "status": "False", "message": "containers not ready"},
    ]},
}
summary = summarize(pod)
print(summary.state, summary.transitioning, summary.message)
# unavailable True ['containers not ready']
print(str(summary))
# [progressing] containers not ready
```

Grouping objects:

```python
from kubewrangle.objectset import ObjectSet

objects = ObjectSet(
    {"apiVersion": "v1", "kind": "ConfigMap", "metadata": {"name": "a", "namespace": "ns1"}},
)
print(objects.namespaces(), objects.gvks())
```

Registering a schema with a mapper:

```python
from kubewrangle.schemas.core import Schemas
from kubewrangle.schemas.mappers import Move
from kubewrangle.schemas.types import Field, Schema

schemas = Schemas()
schemas.add_mapper("widget", Move(from_="name", to="displayName"))
schemas.add_schema(Schema(id="widget", resource_fields={"name": Field(type="string")}))

widget = schemas.schema("widgets")   # found by plural name as well
print(list(widget.resource_fields))  # ['displayName']

data = {"name": "x"}
widget.mapper.from_internal(data)    # {'displayName': 'x'}
widget.mapper.to_internal(data)      # {'name': 'x'}
```

## What it does not do

The package works only on data you hand it. It does not talk to a cluster,
watch or cache objects, or run controllers. Schemas are built by hand from
`Schema` and `Field` values; the registry does not derive them from Python
classes, and there is no generation of OpenAPI documents from schemas.

## Running the tests

```
pip install .[test]
pytest
```