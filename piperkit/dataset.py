"""Schemas, row-oriented data sets, validation and error collection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Sequence

from .errors import ColumnNotFound, ValidationError, ValueType
from .expression import ColumnExpression, Expression
from .values import Value


@dataclass(frozen=True)
class Column:
    """A named, typed column."""

    name: str
    column_type: ValueType

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            object.__setattr__(self, "name", str(self.name))

    def convert(self, value: Value) -> Value:
        return value.convert_to(self.column_type)


@dataclass
class Schema:
    """An ordered collection of columns."""

    columns: list[Column] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.columns = list(self.columns)

    def get_column_types(self) -> list[ValueType]:
        return [c.column_type for c in self.columns]

    def get_column_index(self, column_name: str) -> int | None:
        return next(
            (i for i, c in enumerate(self.columns) if c.name == column_name), None
        )

    def get_col_expr(self, name: str) -> Expression:
        index = self.get_column_index(name)
        if index is None:
            raise ColumnNotFound(name)
        return ColumnExpression(column_name=name, column_index=index)

    def convert(self, row: Sequence[Value]) -> list[Value]:
        return [c.convert(v) for v, c in zip(row, self.columns)]

    def dump(self) -> str:
        return ", ".join(f"{c.name} as {c.column_type}" for c in self.columns)


class DataSet(ABC):
    """A one-shot iterator of rows sharing a schema."""

    @property
    @abstractmethod
    def schema(self) -> Schema: ...

    @abstractmethod
    def __next__(self) -> list[Value]: ...

    def __iter__(self) -> Iterator[list[Value]]:
        return self

    def eval(self) -> tuple[Schema, list[list[Value]]]:
        """Drain all remaining rows."""
        rows = list(self)
        return Schema(list(self.schema.columns)), rows

    def dump(self) -> str:
        """Render the schema, a separator and the next row."""
        header = self.schema.dump()
        lines = [header, "-" * len(header)]
        row = next(self, None)
        if row is not None:
            lines.append(", ".join(v.dump() for v in row))
        return "\n".join(lines) + "\n"


class ValidationMode(Enum):
    """STRICT casts mismatching fields (usually into errors), LENIENT converts them."""

    STRICT = "strict"
    LENIENT = "lenient"


class ValidatedDataSet(DataSet):
    """Wraps a data set and aligns every row with its schema."""

    def __init__(self, data_set: DataSet, mode: ValidationMode):
        self._data_set = data_set
        self._mode = mode

    @property
    def schema(self) -> Schema:
        return self._data_set.schema

    def _check(self, value: Value, column_type: ValueType) -> Value:
        if column_type is ValueType.DYNAMIC or column_type is value.value_type():
            return value
        if self._mode is ValidationMode.STRICT:
            return value.cast_to(column_type)
        return value.convert_to(column_type)

    def __next__(self) -> list[Value]:
        row = next(self._data_set)
        columns = self.schema.columns
        result = [self._check(v, c.column_type) for v, c in zip(row, columns)]
        result.extend(
            Value(ValidationError(f"Column {c.name} is missing in the input data set"))
            for c in columns[len(result):]
        )
        return result


class EagerDataSet(DataSet):
    """A data set whose rows are all held in memory."""

    def __init__(self, schema: Schema, rows: Iterable[Sequence[Value]] = ()):
        self._schema = schema
        self._rows: deque[list[Value]] = deque(list(r) for r in rows)

    @property
    def schema(self) -> Schema:
        return self._schema

    def __next__(self) -> list[Value]:
        if not self._rows:
            raise StopIteration
        return self._rows.popleft()


class ErrorCollectingMode(Enum):
    """Whether errors found in result rows are reported."""

    OFF = "off"
    ON = "on"

    @classmethod
    def _missing_(cls, value: object) -> ErrorCollectingMode | None:
        if value == "debug":
            return cls.ON
        return None


@dataclass(frozen=True)
class ErrorRecord:
    """An error found at a given row and column."""

    row: int
    column: str
    message: str
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"row": self.row, "column": self.column, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


def validated(data_set: DataSet, mode: ValidationMode) -> DataSet:
    return ValidatedDataSet(data_set, mode)


def _errors_in(schema: Schema, rows: Iterable[Sequence[Value]]) -> Iterator[ErrorRecord]:
    for row_num, row in enumerate(rows):
        for column, value in zip(schema.columns, row):
            if value.is_error():
                yield ErrorRecord(row=row_num, column=column.name, message=str(value.data))


def collect_errors(
    schema: Schema, rows: list[list[Value]], mode: ErrorCollectingMode
) -> tuple[Schema, list[list[Value]], list[ErrorRecord]]:
    """Return the data unchanged together with the errors it holds."""
    if mode is ErrorCollectingMode.OFF:
        return schema, rows, []
    return schema, rows, list(_errors_in(schema, rows))


def collect_into_json(
    schema: Schema, rows: Iterable[Sequence[Value]], mode: ErrorCollectingMode
) -> tuple[list[dict[str, Any]], list[ErrorRecord]]:
    """Turn rows into JSON objects; error fields become None and are reported."""
    rows = [list(r) for r in rows]
    documents = [
        {c.name: v.to_json() for c, v in zip(schema.columns, row)} for row in rows
    ]
    errors = [] if mode is ErrorCollectingMode.OFF else list(_errors_in(schema, rows))
    return documents, errors


def empty_data_set(schema: Schema) -> DataSet:
    return EagerDataSet(schema, [])


def eager_data_set(schema: Schema, rows: Iterable[Sequence[Value]]) -> DataSet:
    return EagerDataSet(schema, rows)


def data_set_from_rows(rows: Iterable[Sequence[Any]]) -> EagerDataSet:
    """Build a data set with columns col1..colN typed after the first row."""
    converted = [[Value(v) for v in row] for row in rows]
    if converted:
        schema = Schema(
            [Column(f"col{i}", v.value_type()) for i, v in enumerate(converted[0], start=1)]
        )
    else:
        schema = Schema()
    return EagerDataSet(schema, converted)