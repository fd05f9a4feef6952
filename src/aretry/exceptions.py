r"""Exceptions raised by the retry engines and result adapters.

The errors raised by a wrapped computation are never wrapped by the
engines: they are surfaced as they were raised. The classes in this
module are only used for failures that the library itself produces.
"""

from __future__ import annotations

__all__ = ["AttemptTimeoutError", "RetryError", "UnexpectedResultError"]

from typing import Any


class RetryError(Exception):
    """Base class for the errors produced by aretry itself."""


class UnexpectedResultError(RetryError):
    """Raised by a result adapter when a computation returns a sentinel.

    Args:
        message: The description of the unexpected result.
        value: The value returned by the computation.

    Attributes:
        value: The value returned by the computation.

    Example:
        ```pycon
        >>> from aretry.exceptions import UnexpectedResultError
        >>> error = UnexpectedResultError("expected data is null", value=None)
        >>> str(error)
        'expected data is null'
        >>> error.value is None
        True

        ```
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class AttemptTimeoutError(RetryError, TimeoutError):
    """Raised when no attempt completed before the polling deadline.

    This error carries no message: it tells the caller that the
    computation was too slow, as opposed to a computation that completed
    and failed.

    Example:
        ```pycon
        >>> from aretry.exceptions import AttemptTimeoutError
        >>> str(AttemptTimeoutError())
        ''

        ```
    """
