"""Value types and the errors raised or carried by pipelines."""

from __future__ import annotations

from enum import Enum


class ValueType(Enum):
    """The type of a pipeline value."""

    NULL = "Null"
    BOOL = "Bool"
    INT = "Int"
    LONG = "Long"
    FLOAT = "Float"
    DOUBLE = "Double"
    STRING = "String"
    ARRAY = "Array"
    OBJECT = "Object"
    DATETIME = "DateTime"
    ERROR = "Error"
    DYNAMIC = "Dynamic"

    def __str__(self) -> str:
        return self.value


class PiperError(Exception):
    """Base of all pipeline errors. Two errors are equal when kind and arguments match.

    Each kind formats its positional arguments into ``template``.
    """

    template = "{0}"

    def __str__(self) -> str:
        try:
            return self.template.format(*self.args)
        except IndexError:
            return ""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.args))


def _kind(name: str, template: str = "{0}") -> type[PiperError]:
    """Define an error kind whose message is ``template`` filled with its arguments."""
    return type(
        name,
        (PiperError,),
        {"template": template, "__module__": __name__, "__qualname__": name},
    )


UnknownError = _kind("UnknownError")
PipelineNotFound = _kind("PipelineNotFound", "Pipeline {0} is not found")
SyntaxError_ = _kind("SyntaxError_")
ValidationError = _kind("ValidationError")
InvalidRowLength = _kind("InvalidRowLength", "Expecting row with {1} columns, but got {0}")
InvalidColumnType = _kind("InvalidColumnType", "Expecting column {0} to be {1}, but got {2}")
InvalidTypeCast = _kind("InvalidTypeCast", "Cannot cast from type {0} to type {1}.")
InvalidTypeConversion = _kind("InvalidTypeConversion", "Cannot convert from type {0} to type {1}.")
TypeMismatch = _kind("TypeMismatch", "Cannot apply '{0}' operation between {1} and {2}.")
InvalidOperandType = _kind("InvalidOperandType", "Cannot apply '{0}' operation to {1}.")
InvalidValueType = _kind("InvalidValueType", "Assume value is {1}, but actual type is {0}.")
InvalidArgumentType = _kind(
    "InvalidArgumentType", "Invalid type {2} of argument {1} for function {0}."
)
InvalidValue = _kind("InvalidValue")
InvalidArgumentCount = _kind(
    "InvalidArgumentCount", "Invalid argument count, expecting {0}, got {1}."
)
ArityError = _kind("ArityError", "{0} cannot take {1} arguments.")
ColumnNotFound = _kind("ColumnNotFound", "Column '{0}' not found.")
FormatError = _kind("FormatError", "String {0} is not a valid {1}.")
UnknownOperator = _kind("UnknownOperator", "Unknown operator {0}.")
UnknownFunction = _kind("UnknownFunction", "Unknown function {0}.")
LookupSourceNotFound = _kind("LookupSourceNotFound", "Lookup data source '{0}' not found.")
InvalidMethod = _kind("InvalidMethod", "Invalid method {0}")
InvalidJsonString = _kind("InvalidJsonString", "Invalid JSON string {0}")
InvalidJsonPath = _kind("InvalidJsonPath", "Invalid JSONPath {0}")
AuthError = _kind("AuthError")
HttpError = _kind("HttpError")
RedisError = _kind("RedisError")
Base64Error = _kind("Base64Error")
ProtobufError = _kind("ProtobufError")
EnvVarNotSet = _kind("EnvVarNotSet", "Environment variable {0} is not set.")
Interrupted = _kind("Interrupted", "The service has been stopped.")
ExternalError = _kind("ExternalError")
ColumnAlreadyExists = _kind("ColumnAlreadyExists", "Column with name {0} already exists.")
FunctionAlreadyDefined = _kind(
    "FunctionAlreadyDefined", "Function with name {0} already exists."
)