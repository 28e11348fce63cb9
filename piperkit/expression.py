"""Expressions evaluated against rows, and the operators they apply."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from .errors import InvalidArgumentCount, InvalidValue, TypeMismatch, ValueType
from .values import Value

_RANK = {ValueType.INT: 0, ValueType.LONG: 1, ValueType.FLOAT: 2, ValueType.DOUBLE: 3}


def _numeric(a: ValueType, b: ValueType) -> bool:
    return a in _RANK and b in _RANK


def _wider(a: ValueType, b: ValueType) -> ValueType:
    return a if _RANK[a] >= _RANK[b] else b


class Operator(ABC):
    """An operator applied to already evaluated arguments."""

    @abstractmethod
    def get_output_type(self, argument_types: Sequence[ValueType]) -> ValueType: ...

    @abstractmethod
    def eval(self, arguments: Sequence[Value]) -> Value: ...

    @abstractmethod
    def dump(self, arguments: Sequence[str]) -> str: ...


class _BinaryOperator(Operator):
    symbol = ""
    propagates_null = True

    def dump(self, arguments: Sequence[str]) -> str:
        return f"({arguments[0]} {self.symbol} {arguments[1]})"

    def get_output_type(self, argument_types: Sequence[ValueType]) -> ValueType:
        if len(argument_types) != 2:
            raise InvalidArgumentCount(2, len(argument_types))
        return self._output_type(argument_types[0], argument_types[1])

    def eval(self, arguments: Sequence[Value]) -> Value:
        if len(arguments) != 2:
            return Value(InvalidArgumentCount(2, len(arguments)))
        a, b = arguments
        if self.propagates_null and (a.is_null() or b.is_null()):
            return Value(None)
        return self._apply(a, b)

    def _mismatch(self, a: Value, b: Value) -> Value:
        return Value(TypeMismatch(self.symbol, a.value_type(), b.value_type()))

    @abstractmethod
    def _output_type(self, a: ValueType, b: ValueType) -> ValueType: ...

    @abstractmethod
    def _apply(self, a: Value, b: Value) -> Value: ...

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PlusOperator(_BinaryOperator):
    symbol = "+"

    def _output_type(self, a: ValueType, b: ValueType) -> ValueType:
        if ValueType.DYNAMIC in (a, b):
            return ValueType.DYNAMIC
        if a is ValueType.NULL:
            return b
        if b is ValueType.NULL:
            return a
        if _numeric(a, b):
            return _wider(a, b)
        if a is b is ValueType.STRING:
            return ValueType.STRING
        raise TypeMismatch(self.symbol, a, b)

    def _apply(self, a: Value, b: Value) -> Value:
        ta, tb = a.value_type(), b.value_type()
        if _numeric(ta, tb):
            return Value(a.data + b.data, _wider(ta, tb))
        if ta is tb is ValueType.STRING:
            return Value(a.data + b.data)
        return self._mismatch(a, b)


class DivideOperator(_BinaryOperator):
    symbol = "/"

    def _output_type(self, a: ValueType, b: ValueType) -> ValueType:
        if ValueType.DYNAMIC in (a, b):
            return ValueType.DYNAMIC
        if ValueType.NULL in (a, b):
            return ValueType.NULL
        if _numeric(a, b):
            return _wider(a, b)
        raise TypeMismatch(self.symbol, a, b)

    def _apply(self, a: Value, b: Value) -> Value:
        ta, tb = a.value_type(), b.value_type()
        if not _numeric(ta, tb):
            return self._mismatch(a, b)
        kind = _wider(ta, tb)
        x, y = a.data, b.data
        if kind in (ValueType.INT, ValueType.LONG):
            if y == 0:
                return Value(InvalidValue("Division by zero"))
            quotient = abs(x) // abs(y)
            return Value(quotient if (x < 0) == (y < 0) else -quotient, kind)
        if y == 0:
            return Value(math.copysign(math.inf, x) if x else math.nan, kind)
        return Value(x / y, kind)


class LessThanOperator(_BinaryOperator):
    symbol = "<"

    @staticmethod
    def _comparable(a: ValueType, b: ValueType) -> bool:
        return _numeric(a, b) or (
            a is b and a in (ValueType.STRING, ValueType.BOOL, ValueType.DATETIME)
        )

    def _output_type(self, a: ValueType, b: ValueType) -> ValueType:
        if ValueType.DYNAMIC in (a, b) or ValueType.NULL in (a, b) or self._comparable(a, b):
            return ValueType.BOOL
        raise TypeMismatch(self.symbol, a, b)

    def _apply(self, a: Value, b: Value) -> Value:
        if self._comparable(a.value_type(), b.value_type()):
            return Value(a.data < b.data)
        return self._mismatch(a, b)


class _LogicalOperator(_BinaryOperator):
    """Boolean operator treating null as false."""

    propagates_null = False
    _allowed = (ValueType.BOOL, ValueType.NULL, ValueType.DYNAMIC)
    _operands = (ValueType.BOOL, ValueType.NULL)

    def _output_type(self, a: ValueType, b: ValueType) -> ValueType:
        if a in self._allowed and b in self._allowed:
            return ValueType.BOOL
        raise TypeMismatch(self.symbol, a, b)

    def _apply(self, a: Value, b: Value) -> Value:
        if a.value_type() not in self._operands or b.value_type() not in self._operands:
            return self._mismatch(a, b)
        return Value(self._combine(bool(a.data), bool(b.data)))

    @abstractmethod
    def _combine(self, x: bool, y: bool) -> bool: ...


class AndOperator(_LogicalOperator):
    symbol = "and"

    def _combine(self, x: bool, y: bool) -> bool:
        return x and y


class OrOperator(_LogicalOperator):
    symbol = "or"

    def _combine(self, x: bool, y: bool) -> bool:
        return x or y


class Expression(ABC):
    """Something that yields a value from a row."""

    @abstractmethod
    def get_output_type(self, schema: Sequence[ValueType]) -> ValueType: ...

    @abstractmethod
    def eval(self, row: Sequence[Value]) -> Value: ...

    @abstractmethod
    def dump(self) -> str: ...


@dataclass
class ColumnExpression(Expression):
    column_name: str
    column_index: int

    def _pick(self, items: Sequence):
        if self.column_index >= len(items):
            raise IndexError("Column index out of range")
        return items[self.column_index]

    def get_output_type(self, schema: Sequence[ValueType]) -> ValueType:
        return self._pick(schema)

    def eval(self, row: Sequence[Value]) -> Value:
        return self._pick(row)

    def dump(self) -> str:
        return self.column_name


@dataclass
class LiteralExpression(Expression):
    value: Value

    def get_output_type(self, schema: Sequence[ValueType]) -> ValueType:
        return self.value.value_type()

    def eval(self, row: Sequence[Value]) -> Value:
        return self.value

    def dump(self) -> str:
        return self.value.dump()


@dataclass
class OperatorExpression(Expression):
    operator: Operator
    arguments: list[Expression] = field(default_factory=list)

    def get_output_type(self, schema: Sequence[ValueType]) -> ValueType:
        return self.operator.get_output_type([a.get_output_type(schema) for a in self.arguments])

    def eval(self, row: Sequence[Value]) -> Value:
        values = []
        for argument in self.arguments:
            value = argument.eval(row)
            if value.is_error():
                return value
            values.append(value)
        return self.operator.eval(values)

    def dump(self) -> str:
        return self.operator.dump([a.dump() for a in self.arguments])