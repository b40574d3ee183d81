from .errors import (
    CompletionError,
    FatalError,
    GreeterError,
    HandlerTimeoutError,
    InvocationFailed,
    UnsupportedValueError,
    ValidationError,
)
from .schema import FieldSchema, FieldType, Schema
from .validator import build_schema_checker, validate

__all__ = [
    "CompletionError",
    "FatalError",
    "FieldSchema",
    "FieldType",
    "GreeterError",
    "HandlerTimeoutError",
    "InvocationFailed",
    "Schema",
    "UnsupportedValueError",
    "ValidationError",
    "build_schema_checker",
    "validate",
]
