import pytest

from kubewrangle.merr import Errors, new_errors


def test_no_errors_is_none():
    assert new_errors() is None
    assert new_errors(None, None) is None


def test_single_error_returned_as_is():
    err = ValueError("boom")
    assert new_errors(None, err, None) is err


def test_multiple_errors_aggregate():
    first, second = ValueError("first"), KeyError("second")
    result = new_errors(first, None, second)
    assert isinstance(result, Errors)
    assert list(result) == [first, second]
    assert len(result) == 2


def test_message_joins_with_comma():
    result = new_errors(ValueError("first"), ValueError("second"))
    assert str(result) == "first, second"


def test_empty_leading_message_has_no_separator():
    result = Errors([ValueError(""), ValueError("second")])
    assert str(result) == "second"


def test_errors_can_be_raised():
    result = new_errors(ValueError("a"), ValueError("b"))
    assert str(result) == "a, b"
    with pytest.raises(Errors) as info:
        raise result
    assert info.value is result


def test_err_collapses_single():
    err = ValueError("only")
    assert Errors([err]).err() is err
    assert Errors([]).err() is None