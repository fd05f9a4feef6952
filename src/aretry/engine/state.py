r"""Per-run execution state and final outcome resolution.

This module provides the transient state tracked by an engine during a
single invocation of a retrying computation, and the rule deciding which
error is surfaced once the budget is exhausted.
"""

from __future__ import annotations

__all__ = ["ExecutionState", "raise_final_error"]

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NoReturn

from aretry.exceptions import AttemptTimeoutError

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.engine.manager import CallbackManager

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class ExecutionState:
    """Transient state of one engine run.

    A new state is created on every invocation of a retrying computation
    and discarded when the invocation returns, so nothing is shared
    between invocations.

    Attributes:
        start_time: Monotonic timestamp when the run started.
        attempts: Number of attempts that were started.
        last_error: The most recent definite failure, if any.
        has_definite_failure: Whether at least one attempt completed with
            an error.
        timed_out: Whether at least one attempt was abandoned because the
            deadline was reached before it completed.

    Example:
        ```pycon
        >>> from aretry.engine import ExecutionState
        >>> state = ExecutionState()
        >>> state.record_timeout()
        >>> state.only_timed_out
        True
        >>> state.record_failure(ValueError("boom"))
        >>> state.only_timed_out
        False
        >>> state.resolve(None)
        ValueError('boom')

        ```
    """

    start_time: float = field(default_factory=time.monotonic)
    attempts: int = 0
    last_error: BaseException | None = None
    has_definite_failure: bool = False
    timed_out: bool = False

    @property
    def only_timed_out(self) -> bool:
        """Whether attempts timed out without any definite failure."""
        return self.timed_out and not self.has_definite_failure

    def record_attempt(self) -> None:
        self.attempts += 1

    def record_failure(self, error: BaseException) -> None:
        """Remember a definite failure, replacing the previous one.

        Args:
            error: The exception raised by a completed attempt.
        """
        self.last_error = error
        self.has_definite_failure = True

    def record_timeout(self) -> None:
        self.timed_out = True

    def resolve(
        self,
        error_override: Callable[[], BaseException] | None,
        *,
        override_always: bool = False,
    ) -> BaseException | None:
        """Select the error to surface once the budget is exhausted.

        The rules are applied in this order:
        1. An error override is configured and either an attempt failed
           or ``override_always`` is set: the override wins.
        2. An attempt completed with an error: the most recent one wins,
           even if later attempts only timed out.
        3. Attempts only timed out: an ``AttemptTimeoutError`` without
           message.
        4. Otherwise there is no error (absent result). This covers runs
           without any attempt and runs whose attempts all completed
           without result.

        Args:
            error_override: Optional factory of the error to surface
                instead of the natural failure.
            override_always: Whether the override is surfaced even when
                no attempt failed, for instance when the budget allowed
                no attempt at all.

        Returns:
            The error to raise, or None when the absent result should be
            returned.
        """
        failed = self.has_definite_failure or self.timed_out
        if error_override is not None and (failed or override_always):
            return error_override()
        if self.has_definite_failure:
            return self.last_error
        if self.timed_out:
            return AttemptTimeoutError()
        return None


def raise_final_error(
    state: ExecutionState,
    error_override: Callable[[], BaseException] | None,
    callbacks: CallbackManager,
    *,
    override_always: bool = False,
) -> None:
    """Raise the final error of an exhausted run, if any.

    The on_failure callback is invoked before the error is raised. When
    the error is an override, the last definite failure is chained as its
    cause.

    Args:
        state: The state of the exhausted run.
        error_override: Optional factory of the override error.
        callbacks: Callback manager for invoking on_failure.
        override_always: Whether the override is raised even when no
            attempt failed.

    Raises:
        BaseException: The error selected by ``ExecutionState.resolve``.
    """
    error = state.resolve(error_override, override_always=override_always)
    if error is None:
        logger.debug(f"No result after {state.attempts} attempt(s), returning None")
        return
    logger.debug(
        f"Giving up after {state.attempts} attempt(s): {type(error).__name__}: {error}"
    )
    callbacks.on_failure(
        attempts=state.attempts,
        error=error,
        timed_out=state.timed_out,
        start_time=state.start_time,
    )
    _raise(error, state.last_error)


def _raise(error: BaseException, cause: BaseException | None) -> NoReturn:
    if error is cause:
        raise error
    raise error from cause
