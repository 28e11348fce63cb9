"""Request and response documents exchanged with the pipeline service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .dataset import ErrorCollectingMode, ErrorRecord

JsonRow = dict[str, Any]
RequestData = Union[JsonRow, list[JsonRow]]


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"invalid type for {what}: expected an object")
    return data


def _field(data: dict[str, Any], name: str) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


def _row(data: Any) -> JsonRow:
    row = _require_mapping(data, "row")
    if not all(isinstance(k, str) for k in row):
        raise ValueError("row keys must be strings")
    return dict(row)


def parse_request_data(data: Any) -> RequestData:
    """Accept a single JSON object or a list of objects."""
    if isinstance(data, dict):
        return _row(data)
    if isinstance(data, list):
        return [_row(item) for item in data]
    raise ValueError("data did not match any variant: expected an object or a list of objects")


@dataclass
class LookupRequest:
    source: str = ""
    keys: list[Any] = field(default_factory=list)
    features: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> LookupRequest:
        data = _require_mapping(data, "lookup request")
        source = _field(data, "source")
        keys = _field(data, "keys")
        features = _field(data, "features")
        if not isinstance(source, str):
            raise ValueError("`source` must be a string")
        if not isinstance(keys, list):
            raise ValueError("`keys` must be a list")
        if not isinstance(features, list) or not all(isinstance(f, str) for f in features):
            raise ValueError("`features` must be a list of strings")
        return cls(source=source, keys=list(keys), features=list(features))


@dataclass
class LookupResponse:
    data: list[JsonRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data}


@dataclass
class SingleRequest:
    pipeline: str = ""
    data: RequestData = field(default_factory=dict)
    validate: bool = False
    errors: ErrorCollectingMode = ErrorCollectingMode.ON

    @classmethod
    def from_dict(cls, data: Any) -> SingleRequest:
        data = _require_mapping(data, "request")
        pipeline = _field(data, "pipeline")
        if not isinstance(pipeline, str):
            raise ValueError("`pipeline` must be a string")
        validate = data.get("validate", False)
        if not isinstance(validate, bool):
            raise ValueError("`validate` must be a boolean")
        errors = ErrorCollectingMode(data.get("errors", ErrorCollectingMode.ON.value))
        return cls(
            pipeline=pipeline,
            data=parse_request_data(_field(data, "data")),
            validate=validate,
            errors=errors,
        )


@dataclass
class Request:
    requests: list[SingleRequest] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Request:
        data = _require_mapping(data, "request")
        requests = _field(data, "requests")
        if not isinstance(requests, list):
            raise ValueError("`requests` must be a list")
        return cls(requests=[SingleRequest.from_dict(r) for r in requests])


@dataclass
class SingleResponse:
    pipeline: str
    status: str
    time: float | None = None
    count: int | None = None
    data: list[JsonRow] | None = None
    errors: list[ErrorRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"pipeline": self.pipeline, "status": self.status}
        for name in ("time", "count", "data"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.errors:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result


@dataclass
class Response:
    results: list[SingleResponse] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"results": [r.to_dict() for r in self.results]}