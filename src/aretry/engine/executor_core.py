r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and
the asynchronous retry executors: deadline arithmetic, inter-attempt
sleeping and attempt-level logging.
"""

from __future__ import annotations

__all__ = [
    "compute_deadline",
    "log_attempt_failure",
    "log_attempt_timeout",
    "next_wait_time",
    "remaining_time",
]

import logging
import time
from typing import TYPE_CHECKING

from aretry.core import config
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.engine.policy import RetryPolicy, TimePolicy

logger: logging.Logger = logging.getLogger(__name__)


def compute_deadline(policy: TimePolicy, start_time: float) -> float:
    """Compute the monotonic deadline of a time-bounded policy.

    Args:
        policy: The time-bounded policy.
        start_time: Monotonic timestamp when the run started.

    Returns:
        The monotonic deadline.
    """
    return start_time + policy.seconds


def remaining_time(deadline: float) -> float:
    """Return the time left until the deadline, never negative.

    Args:
        deadline: The monotonic deadline.

    Returns:
        The remaining time in seconds.
    """
    return max(0.0, deadline - time.monotonic())


def next_wait_time(deadline: float) -> tuple[float, bool]:
    """Compute the pause before the next deadline check.

    Attempts are spaced at least ``POLL_INTERVAL`` seconds apart. When
    less than that remains before the deadline, the pause is clamped to
    the remaining time and no further attempt must be made.

    Args:
        deadline: The monotonic deadline.

    Returns:
        A tuple (wait_time, exhausted) where ``exhausted`` tells whether
        the budget is used up once the pause is over.

    Example:
        ```pycon
        >>> import time
        >>> from aretry.engine.executor_core import next_wait_time
        >>> next_wait_time(time.monotonic() + 60.0)
        (0.5, False)
        >>> next_wait_time(time.monotonic() - 1.0)
        (0.0, True)

        ```
    """
    remaining = remaining_time(deadline)
    if remaining <= config.POLL_INTERVAL:
        return remaining, True
    return config.POLL_INTERVAL, False


def log_attempt_failure(attempt: int, policy: RetryPolicy, error: BaseException) -> None:
    """Log a recoverable attempt failure.

    Args:
        attempt: The attempt number (0-indexed).
        policy: The policy driving the engine.
        error: The exception raised by the attempt.
    """
    log_structured(
        logger,
        logging.DEBUG,
        f"Unable to get the result of the computation on attempt {attempt + 1}: "
        f"{type(error).__name__}: {error}",
        attempt=attempt + 1,
        policy=repr(policy),
        timed_out=False,
        error=error,
    )


def log_attempt_timeout(attempt: int, policy: RetryPolicy) -> None:
    """Log an attempt abandoned because the deadline was reached.

    Args:
        attempt: The attempt number (0-indexed).
        policy: The policy driving the engine.
    """
    log_structured(
        logger,
        logging.DEBUG,
        f"Attempt {attempt + 1} did not complete before the deadline, abandoning it",
        attempt=attempt + 1,
        policy=repr(policy),
        timed_out=True,
    )
