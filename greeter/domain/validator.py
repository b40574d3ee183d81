"""
Schema validator.

Checks an arbitrary payload against a Schema and reports the first failing
field, in declaration order. Pure and synchronous: no logging, no I/O.
"""

from collections.abc import Callable, Mapping
from typing import Any

from .errors import ValidationError
from .schema import FieldSchema, FieldType, Schema

_MISSING = object()


def validate(schema: Schema, payload: Any) -> ValidationError | None:
    """
    Validate a payload against a schema.

    Args:
        schema: Ordered field rules
        payload: Any value, including None or a non-mapping

    Returns:
        None when every declared field passes, otherwise the error for the
        first field that fails
    """
    return _validate(schema, payload, prefix="")


def build_schema_checker(schema: Schema) -> Callable[[Any], ValidationError | None]:
    """Bind a schema into a single-argument checker."""

    def check(payload: Any) -> ValidationError | None:
        return validate(schema, payload)

    return check


def _validate(schema: Schema, payload: Any, prefix: str) -> ValidationError | None:
    is_mapping = isinstance(payload, Mapping)

    for rule in schema:
        path = f"{prefix}{rule.name}"
        value = payload.get(rule.name, _MISSING) if is_mapping else _MISSING

        if value is _MISSING:
            if rule.required:
                return ValidationError(path, f"missing field `{path}`")
            continue

        error = _check_field(rule, value, path)
        if error is not None:
            return error

    return None


def _check_field(rule: FieldSchema, value: Any, path: str) -> ValidationError | None:
    if value is None:
        if rule.allows_null():
            return None
        return _invalid_type(rule, path)

    if not rule.type.matches(value):
        return _invalid_type(rule, path)

    if rule.min_length is not None and len(value) < rule.min_length:
        return ValidationError(
            path, f"field `{path}` must have a length of at least {rule.min_length}"
        )

    if rule.allowed_values is not None and not _is_allowed(rule.allowed_values, value):
        return ValidationError(path, f"field `{path}` has unsupported value `{value}`")

    if rule.type is FieldType.OBJECT and rule.nested is not None:
        return _validate(rule.nested, value, prefix=f"{path}.")

    return None


def _invalid_type(rule: FieldSchema, path: str) -> ValidationError:
    return ValidationError(
        path, f"field `{path}` has invalid type; expected `{rule.type.value}`"
    )


def _is_allowed(allowed_values: frozenset, value: Any) -> bool:
    try:
        return value in allowed_values
    except TypeError:
        # unhashable values can never be set members
        return False
