r"""Shared test helpers for computations with controlled behavior."""

from __future__ import annotations

__all__ = ["CountingComputation", "SlowComputation", "blocking_computation"]

import threading
import time
from typing import Any


class CountingComputation:
    """Computation replaying a list of outcomes and counting invocations.

    Each outcome is either returned or, when it is an exception, raised.
    The last outcome is repeated once the list is exhausted.

    Args:
        *outcomes: The outcomes of the successive invocations.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0
        self.call_times: list[float] = []
        self._lock = threading.Lock()

    def __call__(self) -> Any:
        with self._lock:
            index = min(self.calls, len(self.outcomes) - 1)
            self.calls += 1
            self.call_times.append(time.monotonic())
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class SlowComputation(CountingComputation):
    """Computation sleeping ``delay`` seconds before each outcome.

    Args:
        delay: Time in seconds spent in each invocation, or a list of
            delays for the successive invocations.
        *outcomes: The outcomes of the successive invocations.
    """

    def __init__(self, delay: float | list[float], *outcomes: Any) -> None:
        super().__init__(*outcomes)
        self.delays = delay if isinstance(delay, list) else [delay]

    def __call__(self) -> Any:
        with self._lock:
            delay = self.delays[min(self.calls, len(self.delays) - 1)]
        time.sleep(delay)
        return super().__call__()


def blocking_computation(release: threading.Event, value: Any = "done") -> Any:
    """Return ``value`` once ``release`` is set.

    Args:
        release: The event unblocking the computation.
        value: The value returned.

    Returns:
        A zero-argument callable.
    """

    def func() -> Any:
        release.wait()
        return value

    return func
