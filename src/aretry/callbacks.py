r"""Callback types and data structures for observability.

This module provides callback support for the retry engines, enabling
users to hook into the retry lifecycle for logging, metrics or alerting.

The callback system provides four lifecycle hooks:
- on_attempt: Called before each attempt
- on_retry: Called after each attempt that did not produce a result
- on_success: Called when an attempt produces a result
- on_failure: Called when the budget is exhausted, before the final error is raised

Example:
    ```pycon
    >>> from aretry import retry
    >>> from aretry.callbacks import RetryInfo
    >>> from aretry.engine import CallbackConfig, RetryConfig
    >>> def log_retry(retry_info: RetryInfo) -> None:
    ...     print(f"attempt {retry_info.attempt} failed: {retry_info.error}")
    ...
    >>> config = RetryConfig(callbacks=CallbackConfig(on_retry=log_retry))
    >>> retry(lambda: 42, 3, config=config)()
    42

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptInfo",
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
    "invoke_on_attempt",
    "invoke_on_failure",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.engine.policy import RetryPolicy


@dataclass
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        attempt: The current attempt number (1-indexed).
        policy: The policy driving the engine.
    """

    attempt: int
    policy: RetryPolicy


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The attempt number that did not produce a result (1-indexed).
        policy: The policy driving the engine.
        error: The exception raised by the attempt, if it completed and failed.
        timed_out: Whether the attempt was abandoned because the deadline
            was reached before it completed.
        wait_time: The time in seconds the engine sleeps before the next
            deadline check (0 for attempt-bounded policies).
    """

    attempt: int
    policy: RetryPolicy
    error: BaseException | None
    timed_out: bool
    wait_time: float


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempt: The attempt number that succeeded (1-indexed).
        policy: The policy driving the engine.
        total_time: Total time spent on all attempts including sleeps (seconds).
    """

    attempt: int
    policy: RetryPolicy
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempt: The number of attempts that were started.
        policy: The policy driving the engine.
        error: The error that is about to be raised.
        timed_out: Whether at least one attempt was abandoned.
        total_time: Total time spent on all attempts including sleeps (seconds).
    """

    attempt: int
    policy: RetryPolicy
    error: BaseException
    timed_out: bool
    total_time: float


def invoke_on_attempt(
    on_attempt: Callable[[AttemptInfo], None] | None,
    *,
    attempt: int,
    policy: RetryPolicy,
) -> None:
    """Invoke on_attempt callback if provided.

    Args:
        on_attempt: Optional callback to invoke before each attempt.
        attempt: The current attempt number (0-indexed internally). The
            callback receives this as a 1-indexed value (attempt + 1).
        policy: The policy driving the engine.
    """
    if on_attempt is not None:
        on_attempt(AttemptInfo(attempt=attempt + 1, policy=policy))


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    attempt: int,
    policy: RetryPolicy,
    error: BaseException | None,
    timed_out: bool,
    wait_time: float,
) -> None:
    """Invoke on_retry callback if provided.

    Args:
        on_retry: Optional callback to invoke after an unsuccessful attempt.
        attempt: The attempt number (0-indexed internally). The callback
            receives this as a 1-indexed value (attempt + 1).
        policy: The policy driving the engine.
        error: The exception raised by the attempt (if any).
        timed_out: Whether the attempt was abandoned.
        wait_time: The sleep time in seconds before the next check.
    """
    if on_retry is not None:
        on_retry(
            RetryInfo(
                attempt=attempt + 1,
                policy=policy,
                error=error,
                timed_out=timed_out,
                wait_time=wait_time,
            )
        )


def invoke_on_success(
    on_success: Callable[[SuccessInfo], None] | None,
    *,
    attempt: int,
    policy: RetryPolicy,
    start_time: float,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when an attempt succeeds.
        attempt: The attempt number that succeeded (0-indexed internally).
            The callback receives this as a 1-indexed value (attempt + 1).
        policy: The policy driving the engine.
        start_time: The monotonic timestamp when the run started.
    """
    if on_success is not None:
        on_success(
            SuccessInfo(
                attempt=attempt + 1,
                policy=policy,
                total_time=time.monotonic() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    attempts: int,
    policy: RetryPolicy,
    error: BaseException,
    timed_out: bool,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when the budget is exhausted.
        attempts: The number of attempts that were started.
        policy: The policy driving the engine.
        error: The error that is about to be raised.
        timed_out: Whether at least one attempt was abandoned.
        start_time: The monotonic timestamp when the run started.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                attempt=attempts,
                policy=policy,
                error=error,
                timed_out=timed_out,
                total_time=time.monotonic() - start_time,
            )
        )
