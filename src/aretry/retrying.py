r"""Synchronous retry entry points.

This module provides the functional form of the synchronous engine:
``retry`` for attempt-bounded policies and ``poll`` for time-bounded
ones. Both return a computation; nothing runs until it is called.
"""

from __future__ import annotations

__all__ = ["poll", "retry"]

from typing import TYPE_CHECKING, TypeVar

from aretry.computation import Computation

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import timedelta

    from aretry.computation import RetryingComputation
    from aretry.core.units import TimeUnit
    from aretry.engine.config import RetryConfig

T = TypeVar("T")


def retry(
    func: Callable[[], T],
    max_attempts: int,
    *,
    config: RetryConfig | None = None,
    error_override: Callable[[], BaseException] | None = None,
) -> RetryingComputation[T]:
    """Build a computation retrying ``func`` at most ``max_attempts`` times.

    Args:
        func: The zero-argument computation.
        max_attempts: Maximum number of attempts. Must be >= 0.
        config: Optional retry configuration.
        error_override: Optional factory of the error raised instead of
            the last failure once every attempt failed.

    Returns:
        The retrying computation.

    Raises:
        ValueError: If max_attempts is negative.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry import retry
        >>> func = Mock(side_effect=[ConnectionError("down"), "up"])
        >>> retry(func, 2)()
        'up'
        >>> retry(func, 0)() is None
        True

        ```
    """
    return Computation(func).retry(max_attempts, config=config, error_override=error_override)


def poll(
    func: Callable[[], T],
    duration: float | timedelta,
    unit: TimeUnit | None = None,
    *,
    config: RetryConfig | None = None,
    error_override: Callable[[], BaseException] | None = None,
) -> RetryingComputation[T]:
    """Build a computation retrying ``func`` until ``duration`` elapses.

    Args:
        func: The zero-argument computation.
        duration: The polling budget, a number in ``unit`` or a timedelta.
        unit: Unit of a numeric duration. Defaults to milliseconds.
        config: Optional retry configuration.
        error_override: Optional factory of the error raised instead of
            the last failure once the deadline passed.

    Returns:
        The retrying computation.

    Example:
        ```pycon
        >>> from aretry import TimeUnit, poll
        >>> poll(lambda: "cat", 1, TimeUnit.SECONDS)()
        'cat'
        >>> poll(lambda: "cat", 0)() is None
        True

        ```
    """
    return Computation(func).poll(duration, unit, config=config, error_override=error_override)
