# piperkit

piperkit provides the parts that a row-oriented feature-processing pipeline is built from:
typed values, schemas, data sets that are read once, expressions, and aggregation functions.
It has no dependencies outside the standard library.

## Modules

- `piperkit.errors`: the `ValueType` enum (`NULL`, `BOOL`, `INT`, `LONG`, `FLOAT`,
  `DOUBLE`, `STRING`, `ARRAY`, `OBJECT`, `DATETIME`, `ERROR`, `DYNAMIC`) and the
  `PiperError` exception family (`ColumnNotFound`, `InvalidArgumentCount`,
  `InvalidTypeCast`, `TypeMismatch`, `ValidationError` and others). Two errors compare
  equal when they are of the same kind and have the same arguments.
- `piperkit.values`: `Value`, a typed value. An error is a value too, so it passes through
  expressions without being raised. Its methods:
  - `value_type()`, `is_null()`, `is_error()`
  - `get_bool()`, which raises when the value is not a boolean
  - `cast_to(type)`, a strict cast that only converts between numeric types
  - `convert_to(type)`, a lenient conversion to strings, booleans, numbers and datetimes.
    A conversion that fails gives an error value.
  - `dump()`, `to_json()` and `Value.from_json(data)`
- `piperkit.expression`: `ColumnExpression`, `LiteralExpression` and `OperatorExpression`,
  together with the operators `PlusOperator`, `DivideOperator`, `LessThanOperator`,
  `AndOperator` and `OrOperator`.
- `piperkit.dataset`: `Column` and `Schema`, and the `DataSet` interface. A data set is an
  iterator of rows; `eval()` reads all remaining rows and `dump()` renders the schema and
  the next row. This module also has:
  - `EagerDataSet`, `eager_data_set`, `empty_data_set` and `data_set_from_rows`. The last
    one names the columns `col1`..`colN` and takes their types from the first row.
  - `validated(data_set, mode)`, which aligns each row with the schema. The mode is
    `ValidationMode.STRICT` (cast) or `ValidationMode.LENIENT` (convert). Columns missing
    from a row are filled with validation errors.
  - `collect_errors` and `collect_into_json`, which report error values as `ErrorRecord`s
    under `ErrorCollectingMode.ON`. In JSON output an error field becomes `None`.
- `piperkit.aggregation`: the `AggregationFunction` interface, `Aggregation` (a function
  fed with expressions evaluated on each row), and `All`, `Any`, `Count`, `CountIf`,
  `DistinctCount`, `Sum` and `Avg`.
- `piperkit.selectors`: `ArrayAgg`, `SetAgg`, `ArrayAggIf`, `First`, `Last`, `Min`, `Max`,
  `MinBy` and `MaxBy`.
- `piperkit.registry`: `built_in_agg_functions()` returns a fresh instance of every built-in
  aggregation function, keyed by name. The names are `count`, `count_if`,
  `distinct_count`, `sum`, `avg`, `mean`, `min`, `max`, `least`, `greatest`, `min_by`,
  `max_by`, `every`, `any`, `some`, `first`, `last`, `first_value`, `last_value`,
  `array_agg`, `collect_list`, `collect_set` and `array_agg_if`.
- `piperkit.protocol`: request and response records for a pipeline service. These are
  `Request`, `SingleRequest`, `LookupRequest` (each with `from_dict`), `Response`,
  `SingleResponse` and `LookupResponse` (each with `to_dict`), plus `parse_request_data`.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Example

```python
from piperkit.errors import ValueType
from piperkit.values import Value
from piperkit.dataset import Column, Schema, eager_data_set, validated, ValidationMode
from piperkit.aggregation import Aggregation
from piperkit.expression import ColumnExpression
from piperkit.registry import built_in_agg_functions

schema = Schema([Column("id", ValueType.INT), Column("name", ValueType.STRING)])
ds = eager_data_set(schema, [[Value.from_json(1), Value.from_json(2)]])
schema, rows = validated(ds, ValidationMode.LENIENT).eval()
# rows[0][1] is now the string value "2"

avg = built_in_agg_functions()["avg"]
for n in (1, 2, 3):
    avg.feed([Value.from_json(n)])
print(avg.get_result().dump())  # 2

best = Aggregation(
    built_in_agg_functions()["max_by"],
    [ColumnExpression("score", 0), ColumnExpression("name", 1)],
)
for row in ([Value(3), Value("a")], [Value(7), Value("b")], [Value(5), Value("c")]):
    best.feed(row)
print(best.dump(), best.get_result().dump())  # max_by(score, name) "b"
```

## What it does not do

piperkit does not parse a pipeline language and does not run pipelines from a definition.
It has no lookup data sources and no service or server. The records in `piperkit.protocol`
describe requests and responses, but nothing in the package receives or answers them.

## Running the tests

```
pytest
```