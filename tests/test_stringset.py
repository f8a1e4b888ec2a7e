import pytest

from kubewrangle.stringset import StringSet

CASES = [
    ("test 1", [], [], None, "bar", [], 0),
    ("test 2", [["foo"]], [], "foo", "bar", ["foo"], 1),
    (
        "test 3",
        [["foo", "bar", "baz"], ["bar", "baz"], ["bop"]],
        [["foo", "baz"]],
        "bar",
        "foo",
        ["bar", "bop"],
        2,
    ),
    ("test 4", [["foo"], [""], ["bar"]], [["bar"]], "", "bar", ["foo", ""], 2),
    (
        "test 5",
        [["foo"], ["foo", "bar"], ["foo", "bar", "baz"]],
        [["foo"], ["bar", "baz"]],
        None,
        "foo",
        [],
        0,
    ),
]


@pytest.mark.parametrize(
    "name,add_strings,delete_strings,has_string,missing_string,final_strings,want_len",
    CASES,
    ids=[case[0] for case in CASES],
)
def test_set(name, add_strings, delete_strings, has_string, missing_string, final_strings, want_len):
    s = StringSet()
    for items in add_strings:
        s.add(*items)
    for items in delete_strings:
        s.delete(*items)

    if has_string is not None:
        assert s.has(has_string)
    if missing_string is not None:
        assert not s.has(missing_string)

    assert sorted(s.values()) == sorted(final_strings)
    assert len(s) == want_len


def test_delete_on_empty_set():
    s = StringSet()
    s.delete("missing")
    assert len(s) == 0


def test_contains_and_iter():
    s = StringSet()
    s.add("a", "b")
    assert "a" in s
    assert sorted(s) == ["a", "b"]