import copy

import pytest

from piperkit.aggregation import (
    Aggregation,
    All,
    Any,
    Avg,
    Count,
    CountIf,
    DistinctCount,
    Sum,
)
from piperkit.errors import InvalidArgumentCount, InvalidArgumentType, ValueType
from piperkit.expression import ColumnExpression, LiteralExpression
from piperkit.values import Value


def long(n):
    return Value(n, ValueType.LONG)


def test_all():
    agg = All()
    assert agg.get_result() == Value(None)
    for fed, expected in [(True, True), (True, True), (True, True), (False, False), (True, False)]:
        agg.feed([Value(fed)])
        assert agg.get_result() == Value(expected)


def test_all_null_counts_as_false():
    agg = All()
    agg.feed([Value(True)])
    agg.feed([Value(None)])
    assert agg.get_result() == Value(False)


def test_any():
    agg = Any()
    assert agg.get_result() == Value(None)
    for fed, expected in [
        (False, False),
        (False, False),
        (False, False),
        (True, True),
        (False, True),
    ]:
        agg.feed([Value(fed)])
        assert agg.get_result() == Value(expected)


def test_any_ignores_null():
    agg = Any()
    agg.feed([Value(None)])
    assert agg.get_result() == Value(None)


def test_all_any_output_type():
    assert All().get_output_type([ValueType.BOOL]) is ValueType.BOOL
    assert Any().get_output_type([ValueType.DYNAMIC]) is ValueType.BOOL
    with pytest.raises(InvalidArgumentCount) as info:
        All().get_output_type([])
    assert info.value == InvalidArgumentCount(1, 0)


def test_all_feed_wrong_count():
    with pytest.raises(InvalidArgumentCount):
        All().feed([Value(True), Value(False)])


def test_count():
    agg = Count()
    assert agg.get_output_type([]) is ValueType.LONG
    assert agg.get_result() == long(0)
    agg.feed([long(1)])
    assert agg.get_result() == long(1)
    agg.feed([long(2)])
    assert agg.get_result() == long(2)
    agg.feed([long(3)])
    assert agg.get_result() == long(3)


def test_count_if():
    agg = CountIf()
    assert agg.get_output_type([ValueType.DYNAMIC]) is ValueType.LONG
    assert agg.get_result() == long(0)
    agg.feed([Value(True)])
    assert agg.get_result() == long(1)
    agg.feed([Value(False)])
    assert agg.get_result() == long(1)
    agg.feed([Value(True)])
    assert agg.get_result() == long(2)


def test_count_if_ignores_non_bool():
    agg = CountIf()
    agg.feed([Value(3)])
    agg.feed([Value(None)])
    assert agg.get_result() == long(0)


def test_count_if_output_type_errors():
    agg = CountIf()
    with pytest.raises(InvalidArgumentType) as info:
        agg.get_output_type([ValueType.INT])
    assert info.value == InvalidArgumentType("count_if", 1, ValueType.INT)
    with pytest.raises(InvalidArgumentCount):
        agg.get_output_type([ValueType.BOOL, ValueType.BOOL])


def test_count_distinct():
    agg = DistinctCount()
    assert agg.get_output_type([ValueType.INT]) is ValueType.LONG
    assert agg.get_result() == long(0)
    for fed, expected in [(1, 1), (2, 2), (3, 3), (2, 3), (4, 4)]:
        agg.feed([long(fed)])
        assert agg.get_result() == long(expected)


def test_count_distinct_requires_arguments():
    with pytest.raises(InvalidArgumentCount):
        DistinctCount().get_output_type([])


def test_sum():
    agg = Sum()
    assert agg.get_output_type([ValueType.LONG]) is ValueType.LONG
    assert agg.get_output_type([ValueType.DOUBLE]) is ValueType.DOUBLE
    with pytest.raises(InvalidArgumentCount):
        agg.get_output_type([ValueType.LONG, ValueType.LONG])

    for n in (1, 2, 3):
        agg.feed([long(n)])
    assert agg.get_result() == long(6)

    for x in (1.0, 2.0, 3.0):
        agg.feed([Value(x, ValueType.DOUBLE)])
    assert agg.get_result() == Value(12.0, ValueType.DOUBLE)


def test_sum_ignores_null_and_empty_is_null():
    agg = Sum()
    assert agg.get_result() == Value(None)
    agg.feed([Value(None)])
    agg.feed([Value(5)])
    assert agg.get_result() == Value(5)


def test_avg():
    agg = Avg()
    assert agg.get_output_type([ValueType.LONG]) is ValueType.LONG
    assert agg.get_output_type([ValueType.DOUBLE]) is ValueType.DOUBLE
    with pytest.raises(InvalidArgumentCount):
        agg.get_output_type([ValueType.LONG, ValueType.LONG])

    for n in (1, 2, 3):
        agg.feed([long(n)])
    assert agg.get_result() == long(2)

    for x in (1.0, 2.0, 3.0):
        agg.feed([Value(x, ValueType.DOUBLE)])
    assert agg.get_result() == Value(2.0, ValueType.DOUBLE)


def test_dump_names():
    names = [f.dump() for f in (All(), Any(), Count(), CountIf(), DistinctCount(), Sum(), Avg())]
    assert names == ["all", "any", "count", "count_if", "distinct_count", "sum", "avg"]


def test_aggregation_over_rows():
    agg = Aggregation(Sum(), [ColumnExpression(column_name="a", column_index=0)])
    assert agg.get_output_type([ValueType.INT]) is ValueType.INT
    for n in (1, 2, 3):
        agg.feed([Value(n)])
    assert agg.get_result() == Value(6)
    assert agg.dump() == "sum(a)"


def test_aggregation_dump_multiple_arguments():
    agg = Aggregation(
        DistinctCount(),
        [ColumnExpression(column_name="a", column_index=0), LiteralExpression(Value(1))],
    )
    assert agg.dump() == "distinct_count(a, 1)"


def test_aggregation_copy_has_fresh_state():
    agg = Aggregation(Count(), [ColumnExpression(column_name="a", column_index=0)])
    agg.feed([Value(1)])
    clone = copy.copy(agg)
    agg.feed([Value(2)])
    assert agg.get_result() == long(2)
    assert clone.get_result() == long(1)
    assert clone.arguments is agg.arguments


def test_function_copy_is_independent():
    original = Sum()
    original.feed([Value(1)])
    clone = copy.copy(original)
    clone.feed([Value(10)])
    assert original.get_result() == Value(1)
    assert clone.get_result() == Value(11)