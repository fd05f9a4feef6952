r"""aretry - Composable primitives for retrying fallible computations.

This package wraps a zero-argument computation so that it is retried
until it succeeds, a number of attempts is used up, or a deadline
passes. Attempts can run on the calling thread or on a worker pool, and
the outcome can be delivered to a callback from a background task.

Key Features:
    - Attempt-bounded (``retry``) and time-bounded (``poll``) policies
    - Worker-pool variants (``retry_async``, ``poll_async``) that tell a
      computation too slow to finish apart from one that failed
    - Result adapters for computations signaling failure with None/False
    - Error overrides replacing the natural failure
    - Callback-based delivery of the outcome (``to_async``)
    - Lifecycle callbacks and structured logging for observability

Example:
    ```pycon
    >>> from unittest.mock import Mock
    >>> from aretry import TimeUnit, builder, retry_until_equal
    >>> func = Mock(side_effect=[TimeoutError(), "ok"])
    >>> builder(func).retry(3)()
    'ok'
    >>> status = Mock(side_effect=["pending", "done"])
    >>> retry_until_equal(status, "done").poll(2, TimeUnit.SECONDS)()
    'done'

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptTimeoutError",
    "Computation",
    "RetryConfig",
    "RetryError",
    "TimeUnit",
    "UnexpectedResultError",
    "__version__",
    "builder",
    "poll",
    "poll_async",
    "retry",
    "retry_async",
    "retry_until_equal",
    "retry_until_not_null",
    "retry_until_test_ok",
    "retry_until_true",
    "to_async",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.adapters import (
    retry_until_equal,
    retry_until_not_null,
    retry_until_test_ok,
    retry_until_true,
)
from aretry.computation import Computation, builder
from aretry.core.units import TimeUnit
from aretry.delivery import to_async
from aretry.engine.config import RetryConfig
from aretry.exceptions import AttemptTimeoutError, RetryError, UnexpectedResultError
from aretry.retrying import poll, retry
from aretry.retrying_async import poll_async, retry_async

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
