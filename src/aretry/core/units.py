r"""Time units used to express polling durations."""

from __future__ import annotations

__all__ = ["TimeUnit"]

from enum import Enum


class TimeUnit(Enum):
    """Unit of a numeric polling duration.

    Example:
        ```pycon
        >>> from aretry.core.units import TimeUnit
        >>> TimeUnit.MILLISECONDS.to_seconds(1500)
        1.5
        >>> TimeUnit.MINUTES.to_seconds(2)
        120.0

        ```
    """

    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "min"
    HOURS = "h"
    DAYS = "d"

    def to_seconds(self, value: float) -> float:
        """Convert a value expressed in this unit to seconds.

        Args:
            value: The value to convert.

        Returns:
            The value in seconds.
        """
        if self in _SUBSECOND_DIVISORS:
            return value / _SUBSECOND_DIVISORS[self]
        return float(value) * _SECOND_MULTIPLIERS[self]


_SUBSECOND_DIVISORS = {
    TimeUnit.NANOSECONDS: 1_000_000_000,
    TimeUnit.MICROSECONDS: 1_000_000,
    TimeUnit.MILLISECONDS: 1_000,
}

_SECOND_MULTIPLIERS = {
    TimeUnit.SECONDS: 1,
    TimeUnit.MINUTES: 60,
    TimeUnit.HOURS: 3_600,
    TimeUnit.DAYS: 86_400,
}
