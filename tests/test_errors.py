import pytest

from piperkit.errors import (
    ColumnNotFound,
    InvalidArgumentCount,
    InvalidRowLength,
    InvalidTypeCast,
    Interrupted,
    PiperError,
    UnknownError,
    ValueType,
)


def test_argument_count_message():
    assert str(InvalidArgumentCount(1, 2)) == "Invalid argument count, expecting 1, got 2."


def test_column_not_found_message():
    assert str(ColumnNotFound("a")) == "Column 'a' not found."


def test_interrupted_message():
    assert str(Interrupted()) == "The service has been stopped."


def test_type_names_in_message():
    assert str(InvalidTypeCast(ValueType.INT, ValueType.STRING)) == (
        "Cannot cast from type Int to type String."
    )


def test_row_length_argument_order():
    assert "with 3 columns, but got 2" in str(InvalidRowLength(2, 3))


def test_equality_and_hash():
    assert UnknownError("x") == UnknownError("x")
    assert hash(UnknownError("x")) == hash(UnknownError("x"))
    assert UnknownError("x") != ColumnNotFound("x")


def test_raised_as_base():
    err = ColumnNotFound("b")
    with pytest.raises(PiperError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "Column 'b' not found."