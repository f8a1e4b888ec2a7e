import string

import pytest

from kubewrangle.name import guess_plural_name, hex_prefix, limit, safe_concat_name


def test_plural_empty():
    assert guess_plural_name("") == ""


def test_plural_endpoints_unchanged():
    assert guess_plural_name("Endpoints") == "Endpoints"
    assert guess_plural_name("endpoints") == "endpoints"


def test_plural_es_suffix():
    assert guess_plural_name("box") == "boxes"
    for word in ("Class", "Batch", "Mesh"):
        assert guess_plural_name(word) == word + "es"


def test_plural_ves_suffix():
    for word in ("Leaf", "Knife"):
        assert guess_plural_name(word) == word + "ves"


def test_plural_consonant_y():
    assert guess_plural_name("Policy") == "Policies"


def test_plural_vowel_y():
    assert guess_plural_name("Key") == "Keys"


def test_plural_short_y_word():
    assert guess_plural_name("by") == "bys"


def test_plural_default():
    assert guess_plural_name("Pod") == "Pods"


def test_hex_prefix_of_empty_string():
    assert hex_prefix("", 5) == "d41d8"


def test_hex_prefix_is_prefix_of_longer():
    assert hex_prefix("abc", 10).startswith(hex_prefix("abc", 4))
    assert len(hex_prefix("abc", 7)) == 7


def test_limit_short_unchanged():
    assert limit("short", 10) == "short"


def test_limit_long_string():
    s = "x" * 40
    result = limit(s, 20)
    assert len(result) == 20
    assert result.startswith(s[:14] + "-")
    assert result.endswith(hex_prefix(s, 5))


def test_limit_too_small_count():
    with pytest.raises(ValueError):
        limit("abcdefgh", 3)


def test_safe_concat_short():
    assert safe_concat_name("abc") == "abc"


def test_safe_concat_long_alnum_cut():
    parts = ["a" * 40, "b" * 40]
    result = safe_concat_name(*parts)
    full = "-".join(parts)
    assert len(result) == 63
    assert result.startswith(full[:57] + "-")
    assert all(c in string.hexdigits for c in result[58:])


def test_safe_concat_long_dash_cut():
    parts = ["a" * 56, "b" * 10]
    result = safe_concat_name(*parts)
    assert len(result) == 63
    assert result.startswith("a" * 56 + "-")
    assert "--" not in result


def test_safe_concat_deterministic():
    first = safe_concat_name("n" * 70)
    assert first == safe_concat_name("n" * 70)
    other = safe_concat_name("n" * 71)
    assert len(first) == len(other) == 63
    assert first[:58] == other[:58]
    assert first[58:] != other[58:]