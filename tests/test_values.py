from datetime import datetime, timezone

import pytest

from piperkit.errors import InvalidValueType, UnknownError, ValueType
from piperkit.values import Value


def test_inferred_types():
    assert Value(42).value_type() is ValueType.INT
    assert Value(2**40).value_type() is ValueType.LONG
    assert Value("x").value_type() is ValueType.STRING
    assert Value(None).is_null()
    assert Value(UnknownError("e")).is_error()


def test_json_round_trip():
    doc = {"a": [1, 2.5, "s", None, True], "b": {"c": False}}
    assert Value.from_json(doc).to_json() == doc


def test_convert_int_to_string_and_back():
    s = Value(100).convert_to(ValueType.STRING)
    assert s.value_type() is ValueType.STRING
    assert s.convert_to(ValueType.INT) == Value(100)


def test_convert_bad_string_is_error():
    assert Value("foo").convert_to(ValueType.INT).is_error()


def test_strict_cast():
    assert Value(100).cast_to(ValueType.STRING).is_error()
    assert Value(3).cast_to(ValueType.LONG) == Value(3, ValueType.LONG)
    assert Value("foo").cast_to(ValueType.STRING) == Value("foo")


def test_get_bool():
    assert Value(True).get_bool() is True
    with pytest.raises(InvalidValueType):
        Value(1).get_bool()
    with pytest.raises(UnknownError):
        Value(UnknownError("e")).get_bool()


def test_hash_and_equality():
    assert len({Value([1, 2]), Value([1, 2]), Value([2])}) == 2
    assert Value(1) != Value(1, ValueType.LONG)


def test_dump():
    assert Value(None).dump() == "null"
    assert Value(True).dump() == "true"


def test_datetime_string_round_trip():
    dt = datetime(2022, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    s = Value(dt).convert_to(ValueType.STRING)
    assert s.convert_to(ValueType.DATETIME) == Value(dt)