import pytest

from piperkit.errors import InvalidArgumentCount, TypeMismatch, UnknownError, ValueType
from piperkit.expression import (
    AndOperator,
    ColumnExpression,
    DivideOperator,
    LessThanOperator,
    LiteralExpression,
    OperatorExpression,
    OrOperator,
    PlusOperator,
)
from piperkit.values import Value


def _less_than_42():
    return OperatorExpression(
        LessThanOperator(),
        [ColumnExpression("a", 0), LiteralExpression(Value(42))],
    )


def test_operator():
    e = _less_than_42()
    assert e.eval([Value(100)]) == Value(False)
    assert e.eval([Value(21)]) == Value(True)


def test_output_type_and_dump():
    e = _less_than_42()
    assert e.get_output_type([ValueType.INT]) is ValueType.BOOL
    assert e.dump() == "(a < 42)"


def test_error_shortcut():
    err = Value(UnknownError("bad"))
    assert _less_than_42().eval([err]) == err


def test_column_out_of_range():
    with pytest.raises(IndexError):
        ColumnExpression("a", 3).eval([Value(1)])


def test_plus_widens():
    p = PlusOperator()
    assert p.eval([Value(6, ValueType.LONG), Value(1.0)]) == Value(7.0)
    assert p.get_output_type([ValueType.LONG, ValueType.LONG]) is ValueType.LONG
    with pytest.raises(TypeMismatch):
        p.get_output_type([ValueType.STRING, ValueType.ARRAY])
    with pytest.raises(InvalidArgumentCount):
        p.get_output_type([ValueType.LONG])


def test_divide():
    d = DivideOperator()
    assert d.eval([Value(6, ValueType.LONG), Value(3, ValueType.LONG)]) == Value(2, ValueType.LONG)
    assert d.eval([Value(1), Value(0)]).is_error()
    assert d.eval([Value(None), Value(3)]).is_null()


def test_logical():
    assert AndOperator().eval([Value(True), Value(False)]) == Value(False)
    assert OrOperator().eval([Value(True), Value(False)]) == Value(True)
    assert AndOperator().eval([Value(1), Value(True)]).is_error()