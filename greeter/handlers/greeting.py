"""Greeting handler: builds a localized greeting for a user."""

from types import MappingProxyType
from typing import Any

from ..application.contract import Callback, Extensions, InvocationContext
from ..domain import FieldSchema, FieldType, Schema, UnsupportedValueError, build_schema_checker

GREETING_SCHEMA = Schema.of(
    FieldSchema("language", FieldType.STRING, required=True, min_length=1),
    FieldSchema(
        "user",
        FieldType.OBJECT,
        required=True,
        nested=Schema.of(
            FieldSchema("firstName", FieldType.STRING, required=True, min_length=1),
            FieldSchema("lastName", FieldType.STRING, required=True, min_length=1),
            FieldSchema("middleName", FieldType.STRING, nullable=True),
        ),
    ),
)

GREETING_PREFIXES = MappingProxyType({
    "english": "Hello",
    "french": "Bonjour",
})

_check_schema = build_schema_checker(GREETING_SCHEMA)


def handler(
    event: Any,
    context: InvocationContext,
    callback: Callback,
    ext: Extensions,
) -> None:
    """
    Greet the user named in the event, in the requested language.

    Args:
        event: Raw event, validated against GREETING_SCHEMA
        context: Invocation metadata
        callback: Completion callback, invoked exactly once
        ext: Injected logger and config
    """
    logger = ext.logger

    error = _check_schema(event)
    if error is not None:
        logger.error(
            "Greeting request failed validation",
            field=error.path,
            reason=error.reason,
            request_id=context.request_id,
        )
        callback(error)
        return

    language = event["language"]
    prefix = GREETING_PREFIXES.get(language)
    if prefix is None:
        error = UnsupportedValueError(
            f"Language is not supported: {language}",
            field="language",
            value=language,
        )
        logger.error(
            "Unsupported greeting language",
            language=language,
            request_id=context.request_id,
        )
        callback(error)
        return

    user = event["user"]
    middle = normalize_middle_name(user.get("middleName"))

    callback(None, f"{prefix}, {user['firstName']}{middle}{user['lastName']}")


def normalize_middle_name(middle_name: str | None) -> str:
    """Separator placed between first and last name."""
    if not middle_name:
        return " "
    return f" {middle_name} "
