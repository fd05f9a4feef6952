r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that submits each
attempt of a computation to a worker pool and waits for it from the
calling thread.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import contextvars
import logging
import time
from concurrent.futures import wait
from typing import TYPE_CHECKING, TypeVar

from aretry.engine.executor_core import (
    compute_deadline,
    log_attempt_failure,
    log_attempt_timeout,
    next_wait_time,
    remaining_time,
)
from aretry.engine.manager import CallbackManager
from aretry.engine.policy import AttemptPolicy, TimePolicy
from aretry.engine.state import ExecutionState, raise_final_error
from aretry.pool import get_default_executor

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor, Future

    from aretry.engine.config import RetryConfig
    from aretry.engine.policy import RetryPolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes a computation with retry logic on a worker pool.

    Every attempt is an independent unit of work submitted to the pool.
    Attempts are still sequential: the calling thread waits for an
    attempt (or for its timeout) before submitting the next one.

    A completed attempt that returns None is treated as an attempt
    without result and the engine moves on to the next one.

    With a time-bounded policy, the wait for each attempt is bounded by
    the time left before the deadline. An attempt still running when the
    wait times out is abandoned: it is not interrupted, it runs to
    completion in its worker and its outcome is discarded.

    Attributes:
        config: Retry configuration.
        policy: The policy bounding the attempts.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry.engine import AsyncRetryExecutor, AttemptPolicy, RetryConfig
        >>> func = Mock(side_effect=[RuntimeError("boom"), "cat"])
        >>> executor = AsyncRetryExecutor(RetryConfig(), AttemptPolicy(3))
        >>> executor.execute(func)
        'cat'

        ```
    """

    def __init__(self, config: RetryConfig, policy: RetryPolicy) -> None:
        self.config = config
        self.policy = policy
        self.callbacks: CallbackManager = CallbackManager(config.callbacks, policy)

    @property
    def executor(self) -> Executor:
        """The worker pool running the attempts."""
        if self.config.executor is not None:
            return self.config.executor
        return get_default_executor()

    def execute(self, func: Callable[[], T]) -> T | None:
        """Run the attempts of the computation until success or exhaustion.

        Args:
            func: The zero-argument computation.

        Returns:
            The first non-None value produced by the computation, or None
            if no attempt produced one and no error has to be raised.

        Raises:
            BaseException: The error override, the most recent error raised
                by a completed attempt, or ``AttemptTimeoutError`` when the
                attempts of a time-bounded policy never completed in time.
        """
        if isinstance(self.policy, AttemptPolicy):
            return self.execute_attempts(func, self.policy)
        if isinstance(self.policy, TimePolicy):
            return self.execute_poll(func, self.policy)
        msg = f"Unsupported retry policy: {self.policy!r}"
        raise TypeError(msg)

    def execute_attempts(self, func: Callable[[], T], policy: AttemptPolicy) -> T | None:
        """Run at most ``policy.max_attempts`` attempts, waiting for each.

        Args:
            func: The zero-argument computation.
            policy: The attempt-bounded policy.

        Returns:
            The first non-None value produced by the computation.
        """
        state = ExecutionState()
        for attempt in range(policy.max_attempts):
            self.callbacks.on_attempt(attempt)
            state.record_attempt()
            future = self._submit(func)
            wait([future])
            found, result = self._collect(future, attempt, state)
            if found:
                return result
            self.callbacks.on_retry(attempt, future.exception(), timed_out=False, wait_time=0.0)

        raise_final_error(state, self.config.error_override, self.callbacks)
        return None

    def execute_poll(self, func: Callable[[], T], policy: TimePolicy) -> T | None:
        """Run attempts until one produces a value or the deadline passes.

        Args:
            func: The zero-argument computation.
            policy: The time-bounded policy.

        Returns:
            The first non-None value produced by the computation.
        """
        state = ExecutionState()
        deadline = compute_deadline(policy, state.start_time)
        attempt = 0
        while time.monotonic() < deadline:
            self.callbacks.on_attempt(attempt)
            state.record_attempt()
            future = self._submit(func)
            wait([future], timeout=remaining_time(deadline))
            error = None
            timed_out = not future.done()
            if timed_out:
                future.cancel()
                state.record_timeout()
                log_attempt_timeout(attempt, policy)
            else:
                found, result = self._collect(future, attempt, state)
                if found:
                    return result
                error = future.exception()

            wait_time, exhausted = next_wait_time(deadline)
            self.callbacks.on_retry(attempt, error, timed_out=timed_out, wait_time=wait_time)
            time.sleep(wait_time)
            if exhausted:
                break
            attempt += 1

        raise_final_error(
            state, self.config.error_override, self.callbacks, override_always=True
        )
        return None

    def _submit(self, func: Callable[[], T]) -> Future[T]:
        # Each attempt runs in a copy of the caller's context.
        context = contextvars.copy_context()
        return self.executor.submit(context.run, func)

    def _collect(
        self, future: Future[T], attempt: int, state: ExecutionState
    ) -> tuple[bool, T | None]:
        """Read the outcome of a completed attempt.

        Args:
            future: The completed attempt.
            attempt: The attempt number (0-indexed).
            state: The state of the current run.

        Returns:
            A tuple (found, result) where ``found`` tells whether the
            attempt produced a non-None value.
        """
        error = future.exception()
        if error is not None:
            if not isinstance(error, Exception):
                raise error
            state.record_failure(error)
            log_attempt_failure(attempt, self.policy, error)
            return False, None
        result = future.result()
        if result is None:
            logger.debug(f"Attempt {attempt + 1} completed without result")
            return False, None
        self.callbacks.on_success(attempt, state.start_time)
        return True, result
