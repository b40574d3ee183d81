"""One-shot completion callback."""

from dataclasses import dataclass
from typing import Any

from ..domain.errors import CompletionError, GreeterError


@dataclass(frozen=True)
class Outcome:
    """Recorded result of a completed invocation."""

    error: GreeterError | None = None
    result: Any = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class CompletionCallback:
    """
    Callback that accepts exactly one completion.

    The first call records the outcome. Any later call raises
    CompletionError and leaves the recorded outcome untouched.
    """

    def __init__(self) -> None:
        self._outcome: Outcome | None = None
        self.call_count = 0

    def __call__(self, error: GreeterError | None = None, result: Any = None) -> None:
        self.call_count += 1
        if self._outcome is not None:
            raise CompletionError(
                f"Completion callback invoked {self.call_count} times; expected exactly once"
            )
        self._outcome = Outcome(error=error, result=None if error is not None else result)

    @property
    def done(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome
