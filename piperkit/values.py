"""The dynamically typed value carried through pipelines."""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Any, Callable

from .errors import (
    FormatError,
    InvalidTypeCast,
    InvalidTypeConversion,
    InvalidValueType,
    PiperError,
    ValueType,
)

_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_INTEGRAL = (ValueType.INT, ValueType.LONG)
_FLOATING = (ValueType.FLOAT, ValueType.DOUBLE)
_NUMERIC = _INTEGRAL + _FLOATING
_UNTOUCHED = (ValueType.NULL, ValueType.ERROR)


def _infer(data: Any) -> ValueType:
    if data is None:
        return ValueType.NULL
    if isinstance(data, bool):
        return ValueType.BOOL
    if isinstance(data, int):
        return ValueType.INT if _INT_MIN <= data <= _INT_MAX else ValueType.LONG
    if isinstance(data, float):
        return ValueType.DOUBLE
    if isinstance(data, str):
        return ValueType.STRING
    if isinstance(data, datetime):
        return ValueType.DATETIME
    if isinstance(data, (list, tuple)):
        return ValueType.ARRAY
    if isinstance(data, dict):
        return ValueType.OBJECT
    if isinstance(data, PiperError):
        return ValueType.ERROR
    raise TypeError(f"unsupported value {data!r}")


def _freeze(data: Any) -> Any:
    if isinstance(data, list):
        return tuple(data)
    if isinstance(data, dict):
        return frozenset(data.items())
    return data


class Value:
    """A typed value; errors are values too and travel through expressions."""

    __slots__ = ("_type", "_data")

    def __init__(self, data: Any = None, value_type: ValueType | None = None):
        if isinstance(data, Value):
            self._type, self._data = data._type, data._data
            return
        kind = _infer(data) if value_type is None else value_type
        if kind is ValueType.ARRAY:
            data = [Value(v) for v in data]
        elif kind is ValueType.OBJECT:
            data = {str(k): Value(v) for k, v in data.items()}
        elif kind is ValueType.DATETIME and data.tzinfo is None:
            data = data.replace(tzinfo=timezone.utc)
        elif kind in _FLOATING:
            data = float(data)
        elif kind in _INTEGRAL:
            data = int(data)
        self._type = kind
        self._data = data

    @property
    def data(self) -> Any:
        return self._data

    def value_type(self) -> ValueType:
        return self._type

    def is_null(self) -> bool:
        return self._type is ValueType.NULL

    def is_error(self) -> bool:
        return self._type is ValueType.ERROR

    def get_bool(self) -> bool:
        """Return the boolean payload; raise if the value is not a boolean."""
        if self._type is ValueType.BOOL:
            return self._data
        if self._type is ValueType.ERROR:
            raise self._data
        raise InvalidValueType(self._type, ValueType.BOOL)

    def _unchanged_as(self, value_type: ValueType) -> bool:
        return self._type is value_type or value_type is ValueType.DYNAMIC or self._type in _UNTOUCHED

    def cast_to(self, value_type: ValueType) -> Value:
        """Strict cast: only between numeric types."""
        if self._unchanged_as(value_type):
            return self
        if self._type in _NUMERIC and value_type in _NUMERIC:
            return Value(self._data, value_type)
        return Value(InvalidTypeCast(self._type, value_type))

    def convert_to(self, value_type: ValueType) -> Value:
        """Lenient conversion, e.g. numbers to strings and strings to numbers."""
        if self._unchanged_as(value_type):
            return self
        converter = _CONVERTERS.get(value_type)
        result = converter(self, value_type) if converter else None
        if result is None:
            return Value(InvalidTypeConversion(self._type, value_type))
        return result

    def dump(self) -> str:
        kind, data = self._type, self._data
        if kind is ValueType.NULL:
            return "null"
        if kind is ValueType.BOOL:
            return "true" if data else "false"
        if kind in _INTEGRAL:
            return str(data)
        if kind in _FLOATING:
            return repr(data) if math.isfinite(data) else str(data)
        if kind is ValueType.STRING:
            return json.dumps(data)
        if kind is ValueType.ARRAY:
            return "[" + ", ".join(v.dump() for v in data) + "]"
        if kind is ValueType.OBJECT:
            return "{" + ", ".join(f"{json.dumps(k)}: {v.dump()}" for k, v in data.items()) + "}"
        if kind is ValueType.DATETIME:
            return data.isoformat()
        return f"<error: {data}>"

    def to_json(self) -> Any:
        """Return a JSON-compatible Python object; errors become None."""
        kind, data = self._type, self._data
        if kind in _UNTOUCHED:
            return None
        if kind is ValueType.ARRAY:
            return [v.to_json() for v in data]
        if kind is ValueType.OBJECT:
            return {k: v.to_json() for k, v in data.items()}
        if kind is ValueType.DATETIME:
            return data.isoformat()
        return data

    @classmethod
    def from_json(cls, data: Any) -> Value:
        """Build a value from a decoded JSON document."""
        if data is None or isinstance(data, (bool, int, float, str)):
            return cls(data)
        if isinstance(data, list):
            return cls([cls.from_json(v) for v in data], ValueType.ARRAY)
        if isinstance(data, dict):
            return cls({str(k): cls.from_json(v) for k, v in data.items()}, ValueType.OBJECT)
        raise TypeError(f"not a JSON value: {data!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._type is other._type and self._data == other._data

    def __hash__(self) -> int:
        return hash((self._type, _freeze(self._data)))

    def __repr__(self) -> str:
        return f"Value.{self._type.value}({self._data!r})"


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered not in ("true", "false"):
        raise ValueError(text)
    return lowered == "true"


def _parse_datetime(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _parse(text: str, parse: Callable[[str], Any], value_type: ValueType) -> Value:
    try:
        return Value(parse(text.strip()), value_type)
    except ValueError:
        return Value(FormatError(text, value_type))


def _to_string(value: Value, target: ValueType) -> Value | None:
    return Value(value.dump())


def _to_bool(value: Value, target: ValueType) -> Value | None:
    kind, data = value.value_type(), value.data
    if kind in _NUMERIC:
        return Value(data != 0)
    if kind is ValueType.STRING:
        return _parse(data, _parse_bool, target)
    return None


def _to_integral(value: Value, target: ValueType) -> Value | None:
    kind, data = value.value_type(), value.data
    if kind in _NUMERIC or kind is ValueType.BOOL:
        return Value(int(data), target)
    if kind is ValueType.DATETIME:
        return Value(int(data.timestamp()), target)
    if kind is ValueType.STRING:
        return _parse(data, int, target)
    return None


def _to_floating(value: Value, target: ValueType) -> Value | None:
    kind, data = value.value_type(), value.data
    if kind in _NUMERIC or kind is ValueType.BOOL:
        return Value(float(data), target)
    if kind is ValueType.STRING:
        return _parse(data, float, target)
    return None


def _to_datetime(value: Value, target: ValueType) -> Value | None:
    kind, data = value.value_type(), value.data
    if kind in _NUMERIC:
        return Value(datetime.fromtimestamp(data, tz=timezone.utc))
    if kind is ValueType.STRING:
        return _parse(data, _parse_datetime, target)
    return None


_CONVERTERS: dict[ValueType, Callable[[Value, ValueType], Value | None]] = {
    ValueType.STRING: _to_string,
    ValueType.BOOL: _to_bool,
    ValueType.INT: _to_integral,
    ValueType.LONG: _to_integral,
    ValueType.FLOAT: _to_floating,
    ValueType.DOUBLE: _to_floating,
    ValueType.DATETIME: _to_datetime,
}