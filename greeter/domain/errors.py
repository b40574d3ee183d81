"""
Error taxonomy for handler invocations.

Every error a handler signals is a GreeterError. The class-level
``category`` is rendered as a bracketed tag (``[BadRequest] ...``) when the
wrapper hands the failure back to the runtime, so API gateway error
mappings can match on it.
"""

from typing import Any


class GreeterError(Exception):
    """Base class for errors signalled through the completion callback."""

    category = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def tagged_message(self) -> str:
        return f"[{self.category}] {self.message}"


class ValidationError(GreeterError):
    """Event does not match the declared schema."""

    category = "SchemaError"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(reason)
        self.path = path
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.path, self.reason) == (other.path, other.reason)

    def __hash__(self) -> int:
        return hash((self.path, self.reason))

    def __repr__(self) -> str:
        return f"ValidationError(path={self.path!r}, reason={self.reason!r})"


class UnsupportedValueError(GreeterError):
    """Schema-valid value that the business rule does not recognise."""

    category = "BadRequest"

    def __init__(self, message: str, field: str, value: Any) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class HandlerTimeoutError(GreeterError):
    """Handler did not complete before the runtime deadline."""

    category = "Timeout"


class FatalError(GreeterError):
    """Unexpected failure during rule execution."""

    category = "Error"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class CompletionError(RuntimeError):
    """Completion callback invoked more than once."""


class InvocationFailed(Exception):
    """Raised to the hosting runtime when an invocation ends in error."""

    def __init__(self, error: GreeterError) -> None:
        super().__init__(error.tagged_message)
        self.error = error
