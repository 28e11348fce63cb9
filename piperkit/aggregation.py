"""Aggregation functions and the aggregation expression that feeds them."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from .errors import InvalidArgumentCount, InvalidArgumentType, PiperError, ValueType
from .expression import (
    AndOperator,
    DivideOperator,
    Expression,
    Operator,
    OrOperator,
    PlusOperator,
)
from .values import Value


def _truthy(value: Value) -> bool:
    """The boolean payload of *value*, or False when it is not a boolean."""
    try:
        return value.get_bool()
    except PiperError:
        return False


def _expect_count(expected: int, actual: int) -> None:
    if actual != expected:
        raise InvalidArgumentCount(expected, actual)


class AggregationFunction(ABC):
    """A stateful function that folds many rows of arguments into one value."""

    name = ""

    @abstractmethod
    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType: ...

    @abstractmethod
    def feed(self, arguments: Sequence[Value]) -> None: ...

    @abstractmethod
    def get_result(self) -> Value: ...

    def dump(self) -> str:
        return self.name

    def __copy__(self) -> AggregationFunction:
        # A copy never shares accumulated state with its original.
        return copy.deepcopy(self)


@dataclass
class Aggregation:
    """An aggregation function applied to expressions evaluated on each row."""

    aggregation: AggregationFunction
    arguments: list[Expression] = field(default_factory=list)

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        argument_types = [e.get_output_type(input_type) for e in self.arguments]
        return self.aggregation.get_output_type(argument_types)

    def feed(self, row: Sequence[Value]) -> None:
        self.aggregation.feed([e.eval(row) for e in self.arguments])

    def get_result(self) -> Value:
        return self.aggregation.get_result()

    def dump(self) -> str:
        arguments = ", ".join(e.dump() for e in self.arguments)
        return f"{self.aggregation.dump()}({arguments})"

    def __copy__(self) -> Aggregation:
        # Fresh accumulator, shared argument expressions.
        return Aggregation(copy.deepcopy(self.aggregation), self.arguments)


class _Fold(AggregationFunction):
    """Folds a single argument per row with a binary operator; nulls are skipped."""

    operator_type: type[Operator] = PlusOperator

    def __init__(self) -> None:
        self._acc: Value | None = None
        self._op = self.operator_type()

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        _expect_count(1, len(input_type))
        return self._output_type(input_type[0])

    @abstractmethod
    def _output_type(self, argument_type: ValueType) -> ValueType: ...

    def feed(self, arguments: Sequence[Value]) -> None:
        _expect_count(1, len(arguments))
        self._take(arguments[0])

    def _take(self, value: Value) -> None:
        if not value.is_null():
            self._accumulate(value)

    def _accumulate(self, value: Value) -> None:
        self._acc = value if self._acc is None else self._op.eval([self._acc, value])

    def get_result(self) -> Value:
        return self._acc if self._acc is not None else Value(None)


class _LogicalFold(_Fold):
    def _output_type(self, argument_type: ValueType) -> ValueType:
        return ValueType.BOOL


class All(_LogicalFold):
    """True when every fed value is true; nulls count as false."""

    name = "all"
    operator_type = AndOperator

    def _take(self, value: Value) -> None:
        if value.is_null():
            self._acc = Value(False)
        else:
            self._accumulate(value)


class Any(_LogicalFold):
    """True when any fed value is true; nulls are ignored."""

    name = "any"
    operator_type = OrOperator


class Sum(_Fold):
    """Sum of the fed values; nulls are ignored."""

    name = "sum"

    def _output_type(self, argument_type: ValueType) -> ValueType:
        return self._op.get_output_type([argument_type, argument_type])


class Avg(Sum):
    """Sum of the fed values divided by the number of rows fed."""

    name = "avg"

    def __init__(self) -> None:
        super().__init__()
        self._count = 0
        self._div = DivideOperator()

    def _output_type(self, argument_type: ValueType) -> ValueType:
        return self._div.get_output_type([super()._output_type(argument_type), ValueType.LONG])

    def _take(self, value: Value) -> None:
        self._count += 1
        self._accumulate(value)

    def get_result(self) -> Value:
        return self._div.eval([super().get_result(), Value(self._count, ValueType.LONG)])


class _Counter(AggregationFunction):
    def __init__(self) -> None:
        self._count = 0

    def get_result(self) -> Value:
        return Value(self._count, ValueType.LONG)


class Count(_Counter):
    """Number of rows fed."""

    name = "count"

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        return ValueType.LONG

    def feed(self, arguments: Sequence[Value]) -> None:
        self._count += 1


class CountIf(_Counter):
    """Number of rows whose single argument is true."""

    name = "count_if"

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        _expect_count(1, len(input_type))
        kind = input_type[0]
        if kind in (ValueType.BOOL, ValueType.DYNAMIC):
            return ValueType.LONG
        raise InvalidArgumentType(self.name, 1, kind)

    def feed(self, arguments: Sequence[Value]) -> None:
        _expect_count(1, len(arguments))
        if _truthy(arguments[0]):
            self._count += 1


class DistinctCount(AggregationFunction):
    """Number of distinct argument tuples fed."""

    name = "distinct_count"

    def __init__(self) -> None:
        self._buckets: set[tuple[Value, ...]] = set()

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        if not input_type:
            raise InvalidArgumentCount(1, 0)
        return ValueType.LONG

    def feed(self, arguments: Sequence[Value]) -> None:
        self._buckets.add(tuple(arguments))

    def get_result(self) -> Value:
        return Value(len(self._buckets), ValueType.LONG)