r"""Synchronous retry executor.

This module provides the RetryExecutor class that re-invokes a
computation on the calling thread until it succeeds or the budget of
its policy is exhausted.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING, TypeVar

from aretry.engine.executor_core import (
    compute_deadline,
    log_attempt_failure,
    next_wait_time,
)
from aretry.engine.manager import CallbackManager
from aretry.engine.policy import AttemptPolicy, TimePolicy
from aretry.engine.state import ExecutionState, raise_final_error

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.engine.config import RetryConfig
    from aretry.engine.policy import RetryPolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes a computation with retry logic on the calling thread.

    No concurrency is involved: attempts run one after the other on the
    thread that calls ``execute``, which is also the thread that sleeps
    between the attempts of a time-bounded policy.

    Attributes:
        config: Retry configuration.
        policy: The policy bounding the attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry.engine import AttemptPolicy, RetryConfig, RetryExecutor
        >>> func = Mock(side_effect=[RuntimeError("boom"), "cat"])
        >>> executor = RetryExecutor(RetryConfig(), AttemptPolicy(3))
        >>> executor.execute(func)
        'cat'
        >>> func.call_count
        2

        ```
    """

    def __init__(self, config: RetryConfig, policy: RetryPolicy) -> None:
        self.config = config
        self.policy = policy
        self.callbacks: CallbackManager = CallbackManager(config.callbacks, policy)

    def execute(self, func: Callable[[], T]) -> T | None:
        """Invoke the computation until success or exhaustion.

        Args:
            func: The zero-argument computation.

        Returns:
            The first value produced by the computation, or None if the
            policy allowed no attempt.

        Raises:
            BaseException: The error override, or the last error raised
                by the computation, once the budget is exhausted.
        """
        if isinstance(self.policy, AttemptPolicy):
            return self.execute_attempts(func, self.policy)
        if isinstance(self.policy, TimePolicy):
            return self.execute_poll(func, self.policy)
        msg = f"Unsupported retry policy: {self.policy!r}"
        raise TypeError(msg)

    def execute_attempts(self, func: Callable[[], T], policy: AttemptPolicy) -> T | None:
        """Invoke the computation at most ``policy.max_attempts`` times.

        Args:
            func: The zero-argument computation.
            policy: The attempt-bounded policy.

        Returns:
            The first value produced by the computation, or None when
            ``max_attempts`` is 0.
        """
        state = ExecutionState()
        for attempt in range(policy.max_attempts):
            self.callbacks.on_attempt(attempt)
            state.record_attempt()
            try:
                result = func()
            except Exception as exc:
                state.record_failure(exc)
                log_attempt_failure(attempt, policy, exc)
                self.callbacks.on_retry(attempt, exc, timed_out=False, wait_time=0.0)
                continue
            self.callbacks.on_success(attempt, state.start_time)
            return result

        raise_final_error(state, self.config.error_override, self.callbacks)
        return None

    def execute_poll(self, func: Callable[[], T], policy: TimePolicy) -> T | None:
        """Invoke the computation until it succeeds or the deadline passes.

        After each failed attempt the thread sleeps ``POLL_INTERVAL``
        seconds before checking the deadline again, whatever the duration
        of the attempt itself.

        Args:
            func: The zero-argument computation.
            policy: The time-bounded policy.

        Returns:
            The first value produced by the computation, or None when the
            duration is not positive.
        """
        state = ExecutionState()
        deadline = compute_deadline(policy, state.start_time)
        attempt = 0
        while time.monotonic() < deadline:
            self.callbacks.on_attempt(attempt)
            state.record_attempt()
            try:
                result = func()
            except Exception as exc:
                state.record_failure(exc)
                log_attempt_failure(attempt, policy, exc)
                wait_time, exhausted = next_wait_time(deadline)
                self.callbacks.on_retry(attempt, exc, timed_out=False, wait_time=wait_time)
                time.sleep(wait_time)
                if exhausted:
                    break
                attempt += 1
                continue
            self.callbacks.on_success(attempt, state.start_time)
            return result

        raise_final_error(state, self.config.error_override, self.callbacks)
        return None
