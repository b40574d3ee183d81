"""
AWS Lambda adapter for the handler invocation contract.

Turns a contract handler ``(event, context, callback, extensions)`` into
the native Python Lambda signature ``(event, lambda_context)``. Extensions
are created once per wrapped handler, i.e. once per cold start.
"""

from typing import Any

import structlog

from ..application import Extensions, InvocationContext, run
from ..application.contract import AsyncHandler, Handler
from ..config import Settings, settings as default_settings
from ..domain.errors import InvocationFailed
from .logging import Timer, bind_invocation_context, configure_logging


class HandlerWrapper:
    """
    Hosts contract handlers on the Lambda runtime.

    Usage:
        wrapper = HandlerWrapper("greeter")
        greeting_handler = wrapper.wrap(greeting.handler, "greeting")
    """

    def __init__(self, app_name: str, settings: Settings | None = None) -> None:
        self._app_name = app_name
        self._settings = settings or default_settings
        configure_logging(self._settings.service_name, self._settings.log_level)

    @property
    def settings(self) -> Settings:
        return self._settings

    def create_extensions(self, handler_name: str) -> Extensions:
        logger = structlog.get_logger(handler_name).bind(
            app=self._app_name,
            handler=handler_name,
        )
        return Extensions(logger=logger, config=self._settings)

    def wrap(self, handler: Handler | AsyncHandler, handler_name: str):
        """
        Adapt a contract handler to the Lambda runtime signature.

        Args:
            handler: Sync or coroutine handler following the contract
            handler_name: Name bound into every log entry for this handler

        Returns:
            A callable suitable as the Lambda function handler. It returns
            the handler's result on success and raises InvocationFailed,
            carrying a category-tagged message, on error.
        """
        extensions = self.create_extensions(handler_name)
        margin_ms = self._settings.timeout_margin_ms
        default_alias = self._settings.default_alias

        def lambda_handler(event: Any, lambda_context: Any) -> Any:
            context = InvocationContext.from_lambda_context(lambda_context, default_alias)
            bind_invocation_context(context.request_id, context.alias, context.function_name)
            logger = extensions.logger.bind(alias=context.alias)

            with Timer() as t:
                outcome = run(
                    handler,
                    event,
                    context,
                    extensions,
                    timeout=_remaining_seconds(lambda_context, margin_ms),
                )

            if outcome.error is not None:
                logger.warning(
                    "Invocation failed",
                    category=outcome.error.category,
                    error=outcome.error.message,
                    duration_ms=t.duration_ms,
                )
                raise InvocationFailed(outcome.error) from outcome.error

            logger.info("Invocation completed", duration_ms=t.duration_ms)
            return outcome.result

        lambda_handler.__name__ = f"{handler_name}_handler"
        lambda_handler.__wrapped__ = handler
        return lambda_handler


def _remaining_seconds(lambda_context: Any, margin_ms: int) -> float | None:
    """Time left before the runtime deadline, less the safety margin."""
    get_remaining = getattr(lambda_context, "get_remaining_time_in_millis", None)
    if get_remaining is None:
        return None
    return max(get_remaining() - margin_ms, 0) / 1000
