from .completion import CompletionCallback, Outcome
from .contract import AsyncHandler, Callback, Extensions, Handler, InvocationContext
from .invoker import invoke, invoke_async, is_async_handler, run

__all__ = [
    "AsyncHandler",
    "Callback",
    "CompletionCallback",
    "Extensions",
    "Handler",
    "InvocationContext",
    "Outcome",
    "invoke",
    "invoke_async",
    "is_async_handler",
    "run",
]
