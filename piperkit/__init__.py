"""Typed values, schemas, data sets, expressions and aggregation functions for pipelines."""

__version__ = "0.1.0"