r"""Composable retrying computations.

This module provides the Computation class, a thin wrapper around a
zero-argument callable that adds combinator methods. Each combinator
returns a new computation that runs the wrapped one under a retry policy
when it is called; the wrapped callable is never modified.

Example:
    ```pycon
    >>> from unittest.mock import Mock
    >>> from aretry import builder
    >>> func = Mock(side_effect=[RuntimeError("boom"), RuntimeError("boom"), "cat"])
    >>> computation = builder(func).retry(3)
    >>> computation()
    'cat'

    ```
"""

from __future__ import annotations

__all__ = ["Computation", "RetryingComputation", "builder"]

from typing import TYPE_CHECKING, Generic, TypeVar, Union

from aretry.engine.config import RetryConfig
from aretry.engine.executor import RetryExecutor
from aretry.engine.executor_async import AsyncRetryExecutor
from aretry.engine.policy import AttemptPolicy, TimePolicy

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor
    from datetime import timedelta

    from aretry.core.units import TimeUnit

T = TypeVar("T")

Engine = Union[RetryExecutor, AsyncRetryExecutor]


class Computation(Generic[T]):
    """A zero-argument computation that can be retried.

    Args:
        func: The zero-argument callable producing a value or raising.

    Raises:
        TypeError: If func is not callable.
    """

    def __init__(self, func: Callable[[], T]) -> None:
        if not callable(func):
            msg = f"func must be callable, got {type(func).__name__}"
            raise TypeError(msg)
        self.func = func

    def __call__(self) -> T:
        return self.func()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self.func!r})"

    def get(self) -> T:
        """Invoke the computation once and return its value."""
        return self()

    def _as_func(self) -> Callable[[], T]:
        # The callable wrapped by the combinators.
        return self.func

    def retry(
        self,
        max_attempts: int,
        *,
        config: RetryConfig | None = None,
        error_override: Callable[[], BaseException] | None = None,
    ) -> RetryingComputation[T]:
        """Retry the computation at most ``max_attempts`` times.

        The attempts run on the thread calling the returned computation.

        Args:
            max_attempts: Maximum number of attempts. 0 means the
                computation is never invoked and None is returned.
            config: Optional retry configuration.
            error_override: Optional factory of the error raised instead of
                the last failure. Overrides ``config.error_override``.

        Returns:
            The retrying computation.

        Example:
            ```pycon
            >>> from unittest.mock import Mock
            >>> from aretry import Computation
            >>> func = Mock(side_effect=[ValueError("first"), ValueError("second")])
            >>> Computation(func).retry(2)()  # doctest: +SKIP
            Traceback (most recent call last):
            ...
            ValueError: second

            ```
        """
        config = _resolve_config(config, error_override=error_override)
        return RetryingComputation(
            self._as_func(), RetryExecutor(config, AttemptPolicy(max_attempts))
        )

    def poll(
        self,
        duration: float | timedelta,
        unit: TimeUnit | None = None,
        *,
        config: RetryConfig | None = None,
        error_override: Callable[[], BaseException] | None = None,
    ) -> RetryingComputation[T]:
        """Retry the computation until it succeeds or ``duration`` elapses.

        Failed attempts are spaced at least 500 milliseconds apart.

        Args:
            duration: The polling budget, a number in ``unit`` or a timedelta.
            unit: Unit of a numeric duration. Defaults to ``config.unit``,
                milliseconds unless configured otherwise.
            config: Optional retry configuration.
            error_override: Optional factory of the error raised instead of
                the last failure.

        Returns:
            The retrying computation.
        """
        config = _resolve_config(config, error_override=error_override, unit=unit)
        return RetryingComputation(
            self._as_func(), RetryExecutor(config, TimePolicy(duration, config.unit))
        )

    def retry_async(
        self,
        max_attempts: int,
        *,
        config: RetryConfig | None = None,
        executor: Executor | None = None,
        error_override: Callable[[], BaseException] | None = None,
    ) -> RetryingComputation[T]:
        """Retry the computation on a worker pool at most ``max_attempts`` times.

        Args:
            max_attempts: Maximum number of attempts.
            config: Optional retry configuration.
            executor: Optional worker pool. Defaults to ``config.executor``,
                then to the process-wide pool.
            error_override: Optional factory of the error raised instead of
                the last failure.

        Returns:
            The retrying computation.
        """
        config = _resolve_config(config, executor=executor, error_override=error_override)
        return RetryingComputation(
            self._as_func(), AsyncRetryExecutor(config, AttemptPolicy(max_attempts))
        )

    def poll_async(
        self,
        duration: float | timedelta,
        unit: TimeUnit | None = None,
        *,
        config: RetryConfig | None = None,
        executor: Executor | None = None,
        error_override: Callable[[], BaseException] | None = None,
    ) -> RetryingComputation[T]:
        """Retry the computation on a worker pool until ``duration`` elapses.

        Each attempt is awaited at most for the time left before the
        deadline. If no attempt ever completes in time, the returned
        computation raises ``AttemptTimeoutError``.

        Args:
            duration: The polling budget, a number in ``unit`` or a timedelta.
            unit: Unit of a numeric duration.
            config: Optional retry configuration.
            executor: Optional worker pool.
            error_override: Optional factory of the error raised instead of
                the natural failure.

        Returns:
            The retrying computation.
        """
        config = _resolve_config(
            config, executor=executor, error_override=error_override, unit=unit
        )
        return RetryingComputation(
            self._as_func(), AsyncRetryExecutor(config, TimePolicy(duration, config.unit))
        )


class RetryingComputation(Computation[T]):
    """A computation that runs another one under a retry policy.

    Args:
        func: The wrapped zero-argument callable.
        engine: The engine running the attempts.
    """

    def __init__(self, func: Callable[[], T], engine: Engine) -> None:
        super().__init__(func)
        self.engine = engine

    def __call__(self) -> T | None:
        return self.engine.execute(self.func)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(func={self.func!r}, "
            f"engine={self.engine.__class__.__qualname__}, policy={self.engine.policy!r})"
        )

    def _as_func(self) -> Callable[[], T | None]:
        return self


def builder(func: Callable[[], T]) -> Computation[T]:
    """Wrap a zero-argument callable to gain the combinator methods.

    Args:
        func: The zero-argument callable.

    Returns:
        The computation.

    Example:
        ```pycon
        >>> from aretry import builder
        >>> builder(lambda: "cat").poll(1000)()
        'cat'

        ```
    """
    return Computation(func)


def _resolve_config(config: RetryConfig | None, **overrides: object) -> RetryConfig:
    if config is None:
        config = RetryConfig()
    return config.merge(**overrides)
