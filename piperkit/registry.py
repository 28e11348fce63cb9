"""The table of built-in aggregation functions, by name."""

from __future__ import annotations

from typing import Callable

from .aggregation import AggregationFunction, All, Any, Avg, Count, CountIf, DistinctCount, Sum
from .selectors import ArrayAgg, ArrayAggIf, First, Last, Max, MaxBy, Min, MinBy, SetAgg

_BUILT_INS: dict[str, Callable[[], AggregationFunction]] = {
    "count": Count,
    "count_if": CountIf,
    "distinct_count": DistinctCount,
    "sum": Sum,
    "avg": Avg,
    "mean": Avg,
    "min": Min,
    "max": Max,
    "least": Min,
    "greatest": Max,
    "min_by": MinBy,
    "max_by": MaxBy,
    "every": All,
    "any": Any,
    "some": Any,
    "first": First,
    "last": Last,
    "first_value": First,
    "last_value": Last,
    "array_agg": ArrayAgg,
    "collect_list": ArrayAgg,
    "collect_set": SetAgg,
    "array_agg_if": ArrayAggIf,
}


def built_in_agg_functions() -> dict[str, AggregationFunction]:
    """Return a fresh instance of every built-in aggregation function, keyed by name."""
    return {name: factory() for name, factory in _BUILT_INS.items()}