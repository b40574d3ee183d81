"""
Handler invoker.

Runs a handler under the invocation contract and turns whatever it does
into a single Outcome. Contract violations (raising past the handler
boundary, never completing, completing twice) are logged and normalized
here so the wrapper only ever sees one outcome.
"""

import asyncio
import inspect
from typing import Any

from ..domain.errors import CompletionError, FatalError, GreeterError, HandlerTimeoutError
from .completion import CompletionCallback, Outcome
from .contract import AsyncHandler, Extensions, Handler, InvocationContext


def is_async_handler(handler: Any) -> bool:
    return inspect.iscoroutinefunction(handler)


def invoke(
    handler: Handler,
    event: Any,
    context: InvocationContext,
    extensions: Extensions,
) -> Outcome:
    """Invoke a synchronous handler and return its outcome."""
    callback = CompletionCallback()
    try:
        handler(event, context, callback, extensions)
    except CompletionError as e:
        extensions.logger.error("Handler completed more than once", error=str(e))
    except Exception as e:
        _fail_unexpected(callback, extensions, e)

    return _finish(callback, extensions)


async def invoke_async(
    handler: AsyncHandler,
    event: Any,
    context: InvocationContext,
    extensions: Extensions,
    timeout: float | None = None,
) -> Outcome:
    """
    Invoke a coroutine handler and return its outcome.

    Args:
        handler: Coroutine function following the invocation contract
        event: Raw event
        context: Invocation metadata
        extensions: Injected logger and config
        timeout: Seconds to wait before signalling a timeout; None waits forever

    Returns:
        The single outcome of the invocation
    """
    callback = CompletionCallback()
    try:
        await asyncio.wait_for(handler(event, context, callback, extensions), timeout)
    except (asyncio.TimeoutError, asyncio.CancelledError) as e:
        if not callback.done:
            error = HandlerTimeoutError(
                f"Handler did not complete within {timeout} seconds"
                if timeout is not None
                else "Handler was cancelled before completing"
            )
            extensions.logger.error(
                "Handler timed out",
                request_id=context.request_id,
                timeout_seconds=timeout,
                cancelled=isinstance(e, asyncio.CancelledError),
            )
            callback(error)
    except CompletionError as e:
        extensions.logger.error("Handler completed more than once", error=str(e))
    except Exception as e:
        _fail_unexpected(callback, extensions, e)

    return _finish(callback, extensions)


def run(
    handler: Handler | AsyncHandler,
    event: Any,
    context: InvocationContext,
    extensions: Extensions,
    timeout: float | None = None,
) -> Outcome:
    """
    Dispatch to the sync or async path depending on the handler.

    Coroutine handlers get their own event loop, so this must be called from
    synchronous code (the Lambda runtime is). Code already running inside an
    event loop should await invoke_async instead.
    """
    if is_async_handler(handler):
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(invoke_async(handler, event, context, extensions, timeout))
        raise RuntimeError("run() cannot be called from a running event loop; await invoke_async instead")
    return invoke(handler, event, context, extensions)


def _fail_unexpected(
    callback: CompletionCallback,
    extensions: Extensions,
    exc: Exception,
) -> None:
    if callback.done:
        extensions.logger.exception("Handler raised after completing", error=str(exc))
        return

    extensions.logger.exception("Handler raised an unexpected error", error=str(exc))
    callback(FatalError(f"Unexpected error: {exc}", cause=exc))


def _finish(callback: CompletionCallback, extensions: Extensions) -> Outcome:
    outcome = callback.outcome
    if outcome is None:
        extensions.logger.error("Handler returned without completing")
        return Outcome(error=FatalError("Handler returned without completing"))

    if outcome.error is not None and not isinstance(outcome.error, GreeterError):
        cause = outcome.error
        extensions.logger.error(
            "Handler signalled an unclassified error",
            error=str(cause),
            error_type=type(cause).__name__,
        )
        return Outcome(error=FatalError(str(cause), cause=cause))

    return outcome
