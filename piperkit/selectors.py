"""Aggregation functions that collect or pick values out of the rows fed."""

from __future__ import annotations

from typing import Sequence

from .aggregation import AggregationFunction
from .errors import InvalidArgumentCount, InvalidArgumentType, PiperError, ValueType
from .expression import LessThanOperator
from .values import Value


def _check_count(expected: int, actual: int) -> None:
    if actual != expected:
        raise InvalidArgumentCount(expected, actual)


def _truthy(value: Value) -> bool:
    try:
        return value.get_bool()
    except PiperError:
        return False


class ArrayAgg(AggregationFunction):
    """Collect every fed value into an array."""

    def __init__(self) -> None:
        self._result: list[Value] = []

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        _check_count(1, len(input_type))
        return ValueType.ARRAY

    def feed(self, arguments: Sequence[Value]) -> None:
        _check_count(1, len(arguments))
        self._result.append(arguments[0])

    def get_result(self) -> Value:
        return Value(list(self._result), ValueType.ARRAY)

    def dump(self) -> str:
        return "array_agg"


class SetAgg(AggregationFunction):
    """Collect distinct fed values into an array, in first-seen order."""

    def __init__(self) -> None:
        self._result: list[Value] = []

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        _check_count(1, len(input_type))
        return ValueType.ARRAY

    def feed(self, arguments: Sequence[Value]) -> None:
        _check_count(1, len(arguments))
        if arguments[0] not in self._result:
            self._result.append(arguments[0])

    def get_result(self) -> Value:
        return Value(list(self._result), ValueType.ARRAY)

    def dump(self) -> str:
        return "collect_set"


class ArrayAggIf(AggregationFunction):
    """Collect the first argument whenever the second one is true."""

    def __init__(self) -> None:
        self._result: list[Value] = []

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        _check_count(2, len(input_type))
        return ValueType.ARRAY

    def feed(self, arguments: Sequence[Value]) -> None:
        if len(arguments) != 2:
            raise InvalidArgumentCount(1, len(arguments))
        if _truthy(arguments[1]):
            self._result.append(arguments[0])

    def get_result(self) -> Value:
        return Value(list(self._result), ValueType.ARRAY)

    def dump(self) -> str:
        return "array_agg_if"


def _first_last_output_type(name: str, input_type: Sequence[ValueType]) -> ValueType:
    if len(input_type) == 1:
        return input_type[0]
    if len(input_type) == 2:
        if input_type[1] is ValueType.BOOL:
            return input_type[0]
        raise InvalidArgumentType(name, 2, input_type[1])
    raise InvalidArgumentCount(2, len(input_type))


def _first_last_candidate(name: str, arguments: Sequence[Value]) -> Value | None:
    """The value to take from *arguments*, or None when it is to be skipped."""
    if len(arguments) > 2:
        raise InvalidArgumentCount(2, len(arguments))
    if len(arguments) == 1:
        return arguments[0]
    if len(arguments) == 2:
        value, flag = arguments
        if flag.value_type() is not ValueType.BOOL:
            raise InvalidArgumentType(name, 2, flag.value_type())
        if flag.data and value.is_null():
            return None
        return value
    raise InvalidArgumentCount(2, len(arguments))


class First(AggregationFunction):
    """The first value fed; an optional true flag skips nulls."""

    def __init__(self) -> None:
        self._result: Value | None = None

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        return _first_last_output_type("first", input_type)

    def feed(self, arguments: Sequence[Value]) -> None:
        candidate = _first_last_candidate("first", arguments)
        if candidate is not None and self._result is None:
            self._result = candidate

    def get_result(self) -> Value:
        return self._result if self._result is not None else Value(None)

    def dump(self) -> str:
        return "first"


class Last(AggregationFunction):
    """The last value fed; an optional true flag skips nulls."""

    def __init__(self) -> None:
        self._result = Value(None)

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        return _first_last_output_type("last", input_type)

    def feed(self, arguments: Sequence[Value]) -> None:
        candidate = _first_last_candidate("first", arguments)
        if candidate is not None:
            self._result = candidate

    def get_result(self) -> Value:
        return self._result

    def dump(self) -> str:
        return "last"


class _Extremum(AggregationFunction):
    """Tracks the smallest or largest non-null key fed, with an associated value."""

    _name = ""
    _arity = 1
    _keep_less = True

    def __init__(self) -> None:
        self._best: Value | None = None
        self._associated: Value | None = None
        self._op = LessThanOperator()

    def get_output_type(self, input_type: Sequence[ValueType]) -> ValueType:
        _check_count(self._arity, len(input_type))
        return input_type[self._arity - 1]

    def feed(self, arguments: Sequence[Value]) -> None:
        _check_count(self._arity, len(arguments))
        key, associated = arguments[0], arguments[self._arity - 1]
        if key.is_null():
            return
        if self._best is None:
            self._best, self._associated = key, associated
            return
        less = self._op.eval([key, self._best]).get_bool()
        if less == self._keep_less:
            self._best, self._associated = key, associated

    def get_result(self) -> Value:
        return self._associated if self._associated is not None else Value(None)

    def dump(self) -> str:
        return self._name


class Min(_Extremum):
    """The smallest non-null value fed."""

    _name = "min"


class Max(_Extremum):
    """The largest non-null value fed."""

    _name = "max"
    _keep_less = False


class MinBy(_Extremum):
    """The second argument of the row whose first argument is smallest."""

    _name = "min_by"
    _arity = 2


class MaxBy(_Extremum):
    """The second argument of the row whose first argument is largest."""

    _name = "max_by"
    _arity = 2
    _keep_less = False