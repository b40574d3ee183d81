"""
Handler invocation contract.

Every handler has the shape ``handler(event, context, callback, extensions)``
and signals completion by calling ``callback(error, result)`` exactly once.
A single wrapper can then host any number of handlers without per-handler
adaptation code.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from ..config import Settings

Callback = Callable[..., None]
Handler = Callable[[Any, "InvocationContext", Callback, "Extensions"], None]
AsyncHandler = Callable[[Any, "InvocationContext", Callback, "Extensions"], Awaitable[None]]

# arn:aws:lambda:<region>:<account>:function:<name>[:<alias>]
_QUALIFIED_ARN_PARTS = 8


@dataclass(frozen=True)
class InvocationContext:
    """Per-invocation metadata, read-only to the handler."""

    alias: str
    request_id: str
    function_name: str = ""

    @classmethod
    def from_lambda_context(cls, lambda_context: Any, default_alias: str) -> "InvocationContext":
        """
        Build from the runtime's context object.

        The alias is the qualifier of the invoked function ARN. Unqualified
        invocations, and local invocations without a runtime context, fall
        back to the default alias.
        """
        if lambda_context is None:
            return cls(alias=default_alias, request_id=str(uuid4()))

        arn = getattr(lambda_context, "invoked_function_arn", "") or ""
        parts = arn.split(":")
        alias = parts[7] if len(parts) == _QUALIFIED_ARN_PARTS and parts[7] else default_alias

        return cls(
            alias=alias,
            request_id=getattr(lambda_context, "aws_request_id", "") or str(uuid4()),
            function_name=getattr(lambda_context, "function_name", "") or "",
        )


@dataclass(frozen=True)
class Extensions:
    """Process-scoped collaborators injected into every invocation."""

    logger: Any
    config: Settings
