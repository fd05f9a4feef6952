r"""Configuration dataclasses for retry behavior.

This module provides the configuration object consumed by the retry
engines and the configuration of the lifecycle callbacks.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "RetryConfig"]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretry.core.config import DEFAULT_TIME_UNIT
from aretry.core.units import TimeUnit

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor

    from aretry.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_attempt: Optional callback invoked before each attempt.
        on_retry: Optional callback invoked after each unsuccessful attempt.
        on_success: Optional callback invoked when an attempt succeeds.
        on_failure: Optional callback invoked when the budget is exhausted.
    """

    on_attempt: Callable[[AttemptInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    A single configuration value shared by every policy shape. Fields
    that do not apply to an engine are ignored by it, e.g. the sync
    engine never uses ``executor``.

    Args:
        executor: Optional worker pool used by the async engine to run
            each attempt. The process-wide default pool is used when None.
        error_override: Optional factory of the error to raise instead of
            the natural failure once the budget is exhausted.
        unit: Unit of numeric polling durations. Defaults to milliseconds.
        callbacks: Lifecycle callbacks.

    Example:
        ```pycon
        >>> from aretry.core import TimeUnit
        >>> from aretry.engine import RetryConfig
        >>> config = RetryConfig()
        >>> config.unit
        <TimeUnit.MILLISECONDS: 'ms'>
        >>> merged = config.merge(unit=TimeUnit.SECONDS)
        >>> merged.unit
        <TimeUnit.SECONDS: 's'>
        >>> config.unit  # Original unchanged
        <TimeUnit.MILLISECONDS: 'ms'>

        ```
    """

    executor: Executor | None = None
    error_override: Callable[[], BaseException] | None = None
    unit: TimeUnit = DEFAULT_TIME_UNIT
    callbacks: CallbackConfig = field(default_factory=CallbackConfig)

    def __post_init__(self) -> None:
        if not isinstance(self.unit, TimeUnit):
            msg = f"unit must be a TimeUnit, got {type(self.unit).__name__}"
            raise TypeError(msg)
        if self.error_override is not None and not callable(self.error_override):
            msg = "error_override must be a callable returning an exception"
            raise TypeError(msg)

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new RetryConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration fields.
        """
        return {
            "executor": self.executor,
            "error_override": self.error_override,
            "unit": self.unit,
            "callbacks": self.callbacks,
        }
