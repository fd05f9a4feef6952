r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

from aretry.callbacks import (
    invoke_on_attempt,
    invoke_on_failure,
    invoke_on_retry,
    invoke_on_success,
)

if TYPE_CHECKING:
    from aretry.engine.config import CallbackConfig
    from aretry.engine.policy import RetryPolicy


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
        policy: The policy reported to every callback.
    """

    def __init__(self, callbacks: CallbackConfig, policy: RetryPolicy) -> None:
        self.callbacks = callbacks
        self.policy = policy

    def on_attempt(self, attempt: int) -> None:
        """Invoke on_attempt callback.

        Args:
            attempt: Current attempt number (0-indexed).
        """
        invoke_on_attempt(self.callbacks.on_attempt, attempt=attempt, policy=self.policy)

    def on_retry(
        self,
        attempt: int,
        error: BaseException | None,
        timed_out: bool,
        wait_time: float,
    ) -> None:
        """Invoke on_retry callback.

        Args:
            attempt: Attempt number that did not produce a result (0-indexed).
            error: Exception raised by the attempt (if any).
            timed_out: Whether the attempt was abandoned.
            wait_time: Sleep time before the next deadline check.
        """
        invoke_on_retry(
            self.callbacks.on_retry,
            attempt=attempt,
            policy=self.policy,
            error=error,
            timed_out=timed_out,
            wait_time=wait_time,
        )

    def on_success(self, attempt: int, start_time: float) -> None:
        """Invoke on_success callback.

        Args:
            attempt: Attempt number that succeeded (0-indexed).
            start_time: Monotonic timestamp when the run started.
        """
        invoke_on_success(
            self.callbacks.on_success,
            attempt=attempt,
            policy=self.policy,
            start_time=start_time,
        )

    def on_failure(
        self,
        attempts: int,
        error: BaseException,
        timed_out: bool,
        start_time: float,
    ) -> None:
        """Invoke on_failure callback.

        Args:
            attempts: Number of attempts that were started.
            error: The error about to be raised.
            timed_out: Whether at least one attempt was abandoned.
            start_time: Monotonic timestamp when the run started.
        """
        invoke_on_failure(
            self.callbacks.on_failure,
            attempts=attempts,
            policy=self.policy,
            error=error,
            timed_out=timed_out,
            start_time=start_time,
        )
