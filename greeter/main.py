"""Lambda entry points.

Composition root: each contract handler is wrapped once at import, so
extensions are created per cold start and shared by every invocation.
Configure the function handler as ``greeter.main.greeting_handler``.
"""

from .handlers import greeting
from .infrastructure import HandlerWrapper

wrapper = HandlerWrapper("greeter")

greeting_handler = wrapper.wrap(greeting.handler, "greeting")
