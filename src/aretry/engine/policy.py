r"""Retry policies governing how many times a computation is invoked.

Two policy shapes are supported: an attempt-bounded policy that invokes
the computation at most ``max_attempts`` times, and a time-bounded
policy that keeps invoking it until a deadline is reached.
"""

from __future__ import annotations

__all__ = ["AttemptPolicy", "RetryPolicy", "TimePolicy"]

from dataclasses import dataclass
from datetime import timedelta
from typing import Union

from aretry.core.config import DEFAULT_TIME_UNIT
from aretry.core.units import TimeUnit
from aretry.core.validation import validate_duration, validate_max_attempts


@dataclass(frozen=True)
class AttemptPolicy:
    """Attempt-bounded policy.

    Args:
        max_attempts: Maximum number of attempts. Must be >= 0.

    Example:
        ```pycon
        >>> from aretry.engine import AttemptPolicy
        >>> AttemptPolicy(3)
        AttemptPolicy(max_attempts=3)

        ```
    """

    max_attempts: int

    def __post_init__(self) -> None:
        validate_max_attempts(self.max_attempts)


@dataclass(frozen=True)
class TimePolicy:
    """Time-bounded (polling) policy.

    Args:
        duration: The polling budget, either a number expressed in
            ``unit`` or a timedelta (in which case ``unit`` is ignored).
        unit: The unit of a numeric duration. Defaults to milliseconds.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.core import TimeUnit
        >>> from aretry.engine import TimePolicy
        >>> TimePolicy(1500).seconds
        1.5
        >>> TimePolicy(2, TimeUnit.SECONDS).seconds
        2.0
        >>> TimePolicy(timedelta(minutes=1)).seconds
        60.0

        ```
    """

    duration: float | timedelta
    unit: TimeUnit = DEFAULT_TIME_UNIT

    def __post_init__(self) -> None:
        validate_duration(self.duration)

    @property
    def seconds(self) -> float:
        """The polling budget in seconds."""
        if isinstance(self.duration, timedelta):
            return self.duration.total_seconds()
        return self.unit.to_seconds(self.duration)


RetryPolicy = Union[AttemptPolicy, TimePolicy]
