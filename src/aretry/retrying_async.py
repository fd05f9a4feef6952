r"""Worker-pool retry entry points.

This module provides the functional form of the async engine:
``retry_async`` for attempt-bounded policies and ``poll_async`` for
time-bounded ones. The attempts run on a worker pool while the thread
calling the returned computation waits for them.
"""

from __future__ import annotations

__all__ = ["poll_async", "retry_async"]

from typing import TYPE_CHECKING, TypeVar

from aretry.computation import Computation

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor
    from datetime import timedelta

    from aretry.computation import RetryingComputation
    from aretry.core.units import TimeUnit
    from aretry.engine.config import RetryConfig

T = TypeVar("T")


def retry_async(
    func: Callable[[], T],
    max_attempts: int,
    *,
    config: RetryConfig | None = None,
    executor: Executor | None = None,
    error_override: Callable[[], BaseException] | None = None,
) -> RetryingComputation[T]:
    """Build a computation retrying ``func`` on a worker pool.

    Each attempt is awaited without timeout. An attempt returning None
    does not count as a success. The error override is raised only when
    an attempt failed; if every attempt returned None, None is returned.

    Args:
        func: The zero-argument computation.
        max_attempts: Maximum number of attempts. Must be >= 0.
        config: Optional retry configuration.
        executor: Optional worker pool, the process-wide pool by default.
        error_override: Optional factory of the error raised instead of
            the last failure.

    Returns:
        The retrying computation.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry import retry_async
        >>> func = Mock(side_effect=[ConnectionError("down"), "up"])
        >>> retry_async(func, 3)()
        'up'

        ```
    """
    return Computation(func).retry_async(
        max_attempts, config=config, executor=executor, error_override=error_override
    )


def poll_async(
    func: Callable[[], T],
    duration: float | timedelta,
    unit: TimeUnit | None = None,
    *,
    config: RetryConfig | None = None,
    executor: Executor | None = None,
    error_override: Callable[[], BaseException] | None = None,
) -> RetryingComputation[T]:
    """Build a computation polling ``func`` on a worker pool.

    Each attempt is awaited at most for the time left before the
    deadline. Once the deadline passed, the error override wins, even when
    the budget allowed no attempt, then the most recent error raised by a
    completed attempt, then an ``AttemptTimeoutError`` if attempts only
    ever timed out.

    Args:
        func: The zero-argument computation.
        duration: The polling budget, a number in ``unit`` or a timedelta.
        unit: Unit of a numeric duration. Defaults to milliseconds.
        config: Optional retry configuration.
        executor: Optional worker pool, the process-wide pool by default.
        error_override: Optional factory of the error raised instead of
            the natural failure.

    Returns:
        The retrying computation.

    Example:
        ```pycon
        >>> from aretry import TimeUnit, poll_async
        >>> poll_async(lambda: "cat", 2, TimeUnit.SECONDS)()
        'cat'

        ```
    """
    return Computation(func).poll_async(
        duration, unit, config=config, executor=executor, error_override=error_override
    )
