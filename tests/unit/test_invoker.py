"""Tests for single-completion enforcement and handler invocation."""

import asyncio

import pytest

from greeter.application import CompletionCallback, Outcome, invoke, invoke_async, is_async_handler, run
from greeter.domain import (
    CompletionError,
    FatalError,
    HandlerTimeoutError,
    UnsupportedValueError,
    ValidationError,
)
from greeter.handlers import greeting


class TestCompletionCallback:
    def test_records_success(self) -> None:
        callback = CompletionCallback()

        callback(None, "done")

        assert callback.done
        assert callback.call_count == 1
        assert callback.outcome == Outcome(error=None, result="done")
        assert callback.outcome.succeeded

    def test_records_error_and_drops_result(self) -> None:
        callback = CompletionCallback()
        error = ValidationError("user", "missing field `user`")

        callback(error, "ignored")

        assert callback.outcome.error is error
        assert callback.outcome.result is None
        assert not callback.outcome.succeeded

    def test_second_call_raises_and_keeps_first_outcome(self) -> None:
        callback = CompletionCallback()
        callback(None, "first")

        with pytest.raises(CompletionError):
            callback(None, "second")

        assert callback.call_count == 2
        assert callback.outcome.result == "first"

    def test_not_done_before_call(self) -> None:
        callback = CompletionCallback()
        assert not callback.done
        assert callback.outcome is None


class TestInvoke:
    def test_returns_handler_result(self, invocation_context, extensions) -> None:
        event = {"language": "english", "user": {"firstName": "Joe", "lastName": "Shmoe"}}

        outcome = invoke(greeting.handler, event, invocation_context, extensions)

        assert outcome == Outcome(result="Hello, Joe Shmoe")

    def test_returns_handler_error(self, invocation_context, extensions) -> None:
        event = {"language": "klingon", "user": {"firstName": "Joe", "lastName": "Shmoe"}}

        outcome = invoke(greeting.handler, event, invocation_context, extensions)

        assert isinstance(outcome.error, UnsupportedValueError)

    def test_exception_becomes_fatal_error(self, invocation_context, extensions, mock_logger) -> None:
        def broken(event, context, callback, ext):
            raise KeyError("boom")

        outcome = invoke(broken, {}, invocation_context, extensions)

        assert isinstance(outcome.error, FatalError)
        assert isinstance(outcome.error.cause, KeyError)
        mock_logger.exception.assert_called_once()

    def test_exception_after_completion_keeps_outcome(self, invocation_context, extensions) -> None:
        def raises_late(event, context, callback, ext):
            callback(None, "ok")
            raise RuntimeError("after the fact")

        outcome = invoke(raises_late, {}, invocation_context, extensions)

        assert outcome == Outcome(result="ok")

    def test_never_completing_is_fatal(self, invocation_context, extensions, mock_logger) -> None:
        def silent(event, context, callback, ext):
            return None

        outcome = invoke(silent, {}, invocation_context, extensions)

        assert isinstance(outcome.error, FatalError)
        assert "without completing" in outcome.error.message
        mock_logger.error.assert_called_once()

    def test_double_completion_keeps_first(self, invocation_context, extensions, mock_logger) -> None:
        def twice(event, context, callback, ext):
            callback(None, "first")
            callback(None, "second")

        outcome = invoke(twice, {}, invocation_context, extensions)

        assert outcome == Outcome(result="first")
        mock_logger.error.assert_called_once()

    def test_unclassified_error_is_wrapped(self, invocation_context, extensions) -> None:
        cause = ValueError("plain")

        def plain_error(event, context, callback, ext):
            callback(cause)

        outcome = invoke(plain_error, {}, invocation_context, extensions)

        assert isinstance(outcome.error, FatalError)
        assert outcome.error.cause is cause
        assert outcome.error.tagged_message == "[Error] plain"


class TestInvokeAsync:
    @pytest.mark.asyncio
    async def test_completes_across_suspension(self, invocation_context, extensions) -> None:
        async def pending_io(event, context, callback, ext):
            await asyncio.sleep(0)
            callback(None, f"hello {event['name']}")

        outcome = await invoke_async(pending_io, {"name": "Joe"}, invocation_context, extensions, timeout=1)

        assert outcome == Outcome(result="hello Joe")

    @pytest.mark.asyncio
    async def test_timeout_signals_timeout_error(self, invocation_context, extensions, mock_logger) -> None:
        async def stuck(event, context, callback, ext):
            await asyncio.sleep(10)
            callback(None, "too late")

        outcome = await invoke_async(stuck, {}, invocation_context, extensions, timeout=0.01)

        assert isinstance(outcome.error, HandlerTimeoutError)
        assert outcome.error.tagged_message.startswith("[Timeout]")
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_runtime_cancellation_signals_timeout_error(
        self, invocation_context, extensions, mock_logger
    ) -> None:
        started = asyncio.Event()
        callbacks = []

        async def pending_io(event, context, callback, ext):
            callbacks.append(callback)
            started.set()
            await asyncio.sleep(10)
            callback(None, "too late")

        task = asyncio.create_task(invoke_async(pending_io, {}, invocation_context, extensions))
        await started.wait()
        task.cancel()
        outcome = await task

        assert isinstance(outcome.error, HandlerTimeoutError)
        assert outcome.error.message == "Handler was cancelled before completing"
        assert callbacks[0].call_count == 1
        assert mock_logger.error.call_args.kwargs["cancelled"] is True

    @pytest.mark.asyncio
    async def test_timeout_after_completion_keeps_outcome(self, invocation_context, extensions) -> None:
        async def lingers(event, context, callback, ext):
            callback(None, "early")
            await asyncio.sleep(10)

        outcome = await invoke_async(lingers, {}, invocation_context, extensions, timeout=0.01)

        assert outcome == Outcome(result="early")

    @pytest.mark.asyncio
    async def test_exception_becomes_fatal_error(self, invocation_context, extensions) -> None:
        async def broken(event, context, callback, ext):
            await asyncio.sleep(0)
            raise ConnectionError("store unavailable")

        outcome = await invoke_async(broken, {}, invocation_context, extensions)

        assert isinstance(outcome.error, FatalError)


class TestRun:
    def test_dispatches_sync_handler(self, invocation_context, extensions) -> None:
        assert not is_async_handler(greeting.handler)

        outcome = run(greeting.handler, {"language": "english"}, invocation_context, extensions)

        assert isinstance(outcome.error, ValidationError)

    def test_dispatches_async_handler(self, invocation_context, extensions) -> None:
        async def handler(event, context, callback, ext):
            callback(None, context.alias)

        assert is_async_handler(handler)

        outcome = run(handler, {}, invocation_context, extensions, timeout=1)

        assert outcome == Outcome(result="dev")

    @pytest.mark.asyncio
    async def test_async_handler_inside_running_loop_rejected(self, invocation_context, extensions) -> None:
        calls = []

        async def handler(event, context, callback, ext):
            calls.append(event)
            callback(None, "ok")

        with pytest.raises(RuntimeError, match="await invoke_async instead"):
            run(handler, {}, invocation_context, extensions)

        assert calls == []
