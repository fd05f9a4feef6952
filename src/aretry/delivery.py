r"""Callback-based delivery of a computation outcome.

This module runs a computation in the background and posts its outcome
to a two-argument callback. The computation usually is a retrying one;
prefer the synchronous engines for it, since the whole computation
already runs on a worker.

Example:
    ```pycon
    >>> from aretry import retry, to_async
    >>> outcomes = []
    >>> def collect(value, error):
    ...     outcomes.append((value, error))
    ...
    >>> future = to_async(retry(lambda: 42, 3), collect)
    >>> future.result()
    >>> outcomes
    [(42, None)]

    ```
"""

from __future__ import annotations

__all__ = ["Callback", "to_async"]

import logging
from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from aretry.pool import get_default_executor

if TYPE_CHECKING:
    from concurrent.futures import Executor, Future

T = TypeVar("T")

# Receives (value, None) on success or (None, error) on failure
Callback = Callable[[Optional[T], Optional[BaseException]], None]

logger: logging.Logger = logging.getLogger(__name__)


def to_async(
    func: Callable[[], T],
    callback: Callback[T],
    *,
    executor: Executor | None = None,
) -> Future[None]:
    """Run ``func`` once on a worker and post its outcome to ``callback``.

    The callback is invoked exactly once, from the worker thread, with
    ``(value, None)`` when the computation returns (even when the value
    is None) and ``(None, error)`` when it raises. An exception raised by
    the callback itself is logged and set on the returned future; the
    callback is not invoked a second time. An error that is not an
    ``Exception``, such as ``SystemExit``, is posted to the callback too,
    then set on the returned future.

    Args:
        func: The zero-argument computation.
        callback: The callable receiving the outcome.
        executor: Optional worker pool, the process-wide pool by default.

    Returns:
        The future of the background task. It completes once the
        callback returned.

    Raises:
        TypeError: If func or callback is not callable.
    """
    if not callable(func):
        msg = f"func must be callable, got {type(func).__name__}"
        raise TypeError(msg)
    if not callable(callback):
        msg = f"callback must be callable, got {type(callback).__name__}"
        raise TypeError(msg)

    def task() -> None:
        result = None
        error: BaseException | None = None
        try:
            result = func()
        except BaseException as exc:
            logger.debug(f"Computation failed, posting {type(exc).__name__} to callback")
            error = exc
        try:
            callback(result, error)
        except Exception:
            logger.exception("Callback raised while receiving the outcome")
            raise
        if error is not None and not isinstance(error, Exception):
            raise error

    if executor is None:
        executor = get_default_executor()
    return executor.submit(task)
