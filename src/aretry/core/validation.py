r"""Parameter validation utilities for retry policies and adapters.

This module provides validation functions that are called eagerly, when
a policy or an adapter is built, so that configuration errors are never
retried.
"""

from __future__ import annotations

__all__ = ["validate_duration", "validate_max_attempts", "validate_not_none"]

from datetime import timedelta
from typing import Any


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the number of attempts of an attempt-bounded policy.

    Args:
        max_attempts: Maximum number of attempts. Must be >= 0. A value
            of 0 means the computation is never invoked.

    Raises:
        TypeError: If max_attempts is not an integer.
        ValueError: If max_attempts is negative.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(0)
        >>> validate_max_attempts(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 0, got -1

        ```
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        msg = f"max_attempts must be an int, got {type(max_attempts).__name__}"
        raise TypeError(msg)
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)


def validate_duration(duration: float | timedelta) -> None:
    """Validate the duration of a time-bounded policy.

    Non-positive durations are accepted: they describe a budget that is
    already exhausted.

    Args:
        duration: A number expressed in a time unit, or a timedelta.

    Raises:
        TypeError: If duration is neither a number nor a timedelta.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.core.validation import validate_duration
        >>> validate_duration(500)
        >>> validate_duration(timedelta(seconds=2))

        ```
    """
    if isinstance(duration, bool) or not isinstance(duration, (int, float, timedelta)):
        msg = f"duration must be a number or a timedelta, got {type(duration).__name__}"
        raise TypeError(msg)


def validate_not_none(value: Any, name: str) -> None:
    """Check that a required argument is present.

    Args:
        value: The value to check.
        name: The argument name used in the error message.

    Raises:
        ValueError: If value is None.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_not_none
        >>> validate_not_none(42, "expected")
        >>> validate_not_none(None, "expected")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: expected is None

        ```
    """
    if value is None:
        msg = f"{name} is None"
        raise ValueError(msg)
