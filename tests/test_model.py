import json

from kubewrangle.summary.model import (
    Condition,
    Relationship,
    Summary,
    dedup_messages,
    get_unstructured_conditions,
    is_kind,
    nested_map,
    nested_slice,
    nested_string,
    nested_value,
    new_condition,
)


def test_summary_str_plain_state():
    assert str(Summary(state="active")) == "active"


def test_summary_str_transitioning_with_messages():
    s = Summary(state="x", transitioning=True, message=["a", "b"])
    assert str(s) == "[progressing] a, b"


def test_summary_str_transitioning_and_error():
    s = Summary(state="x", transitioning=True, error=True)
    assert str(s) == "[progressing,error]"


def test_summary_str_error_only():
    s = Summary(state="x", error=True, message=["boom"])
    assert str(s) == "error] boom"


def test_is_ready():
    assert Summary(state="active").is_ready() is True
    assert Summary(error=True).is_ready() is False
    assert Summary(transitioning=True).is_ready() is False


def test_copy_is_independent():
    original = Summary(state="s", message=["m"], relationships=[Relationship(name="n")])
    duplicate = original.copy()
    duplicate.message.append("other")
    duplicate.relationships.append(Relationship(name="z"))
    assert original.message == ["m"]
    assert len(original.relationships) == 1
    assert duplicate.state == original.state


def test_new_condition_accessors():
    c = new_condition("Ready", "False", "Why", "msg")
    assert (c.type(), c.status(), c.reason(), c.message()) == ("Ready", "False", "Why", "msg")


def test_condition_equality_ignores_extra_keys():
    a = Condition({"type": "Ready", "status": "True", "lastUpdateTime": "t1"})
    b = Condition({"type": "Ready", "status": "True", "lastUpdateTime": "t2"})
    c = Condition({"type": "Ready", "status": "False"})
    assert a == b
    assert not (a == c)


def test_empty_condition_reads_empty_strings():
    c = Condition()
    assert c.type() == ""
    assert c.message() == ""


def test_get_conditions_from_status():
    obj = {"status": {"conditions": [{"type": "A"}, {"type": "B"}]}}
    assert [c.type() for c in get_unstructured_conditions(obj)] == ["A", "B"]


def test_get_conditions_merges_annotation():
    annotation = json.dumps({"conditions": [{"type": "C", "status": "True"}]})
    obj = {
        "metadata": {"annotations": {"cattle.io/status": annotation}},
        "status": {"conditions": [{"type": "A"}]},
    }
    assert [c.type() for c in get_unstructured_conditions(obj)] == ["A", "C"]


def test_get_conditions_ignores_bad_annotation():
    obj = {
        "metadata": {"annotations": {"cattle.io/status": "{not json"}},
        "status": {"conditions": [{"type": "A"}]},
    }
    assert [c.type() for c in get_unstructured_conditions(obj)] == ["A"]


def test_get_conditions_of_none():
    assert get_unstructured_conditions(None) == []


def test_dedup_messages():
    assert dedup_messages([" a ", "", "a", "b", "  "]) == ["a", "b"]


def test_nested_accessors():
    obj = {"spec": {"active": True, "sub": {"x": "y"}, "items": [{"k": "v"}, "bad"]}}
    assert nested_value(obj, "spec", "sub", "x") == "y"
    assert nested_value(obj, "spec", "missing", "x") is None
    assert nested_string(obj, "spec", "active") == "true"
    assert nested_string(obj, "nope") == ""
    assert nested_map(obj, "spec", "sub") == {"x": "y"}
    assert nested_map(obj, "spec", "active") is None
    assert nested_slice(obj, "spec", "items") == [{"k": "v"}, {}]
    assert nested_slice(obj, "spec", "sub") == []


def test_is_kind_without_groups_requires_v1():
    assert is_kind({"kind": "Pod", "apiVersion": "v1"}, "Pod") is True
    assert is_kind({"kind": "Pod", "apiVersion": "v2"}, "Pod") is False
    assert is_kind({"kind": "Service", "apiVersion": "v1"}, "Pod") is False


def test_is_kind_prefix_group():
    obj = {"kind": "Deployment", "apiVersion": "apps/v1"}
    assert is_kind(obj, "Deployment", "apps/", "extension/") is True
    assert is_kind(obj, "Deployment", "batch/") is False


def test_is_kind_plain_group_matches_when_different():
    assert is_kind({"kind": "App", "apiVersion": "other"}, "App", "catalog.cattle.io") is True
    assert (
        is_kind({"kind": "App", "apiVersion": "catalog.cattle.io"}, "App", "catalog.cattle.io")
        is False
    )


def test_is_kind_empty_group_means_v1():
    assert is_kind({"kind": "X", "apiVersion": "v1"}, "X", "") is True
    assert is_kind({"kind": "X", "apiVersion": "apps/v1"}, "X", "") is False