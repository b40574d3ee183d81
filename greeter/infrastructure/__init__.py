from .lambda_wrapper import HandlerWrapper
from .logging import Timer, bind_invocation_context, configure_logging

__all__ = [
    "HandlerWrapper",
    "Timer",
    "bind_invocation_context",
    "configure_logging",
]
