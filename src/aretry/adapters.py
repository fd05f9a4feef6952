r"""Result adapters for sentinel-based computations.

Some computations never raise: they report that they are not done yet
by returning a sentinel such as None or False. The adapters in this
module turn such a computation into one that raises an
``UnexpectedResultError`` when the sentinel is returned, so that it can
be retried by any engine.

Example:
    ```pycon
    >>> from unittest.mock import Mock
    >>> from aretry import retry_until_not_null
    >>> func = Mock(side_effect=[None, None, "ready"])
    >>> retry_until_not_null(func).retry(3)()
    'ready'

    ```
"""

from __future__ import annotations

__all__ = [
    "retry_until_equal",
    "retry_until_not_null",
    "retry_until_test_ok",
    "retry_until_true",
]

from typing import TYPE_CHECKING, TypeVar

from aretry.computation import Computation
from aretry.core.validation import validate_not_none
from aretry.exceptions import UnexpectedResultError

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def retry_until_not_null(supplier: Callable[[], T | None]) -> Computation[T]:
    """Fail while the supplier returns None.

    Args:
        supplier: The zero-argument callable.

    Returns:
        A computation raising ``UnexpectedResultError("expected data is null")``
        when the supplier returns None, and returning the value otherwise.
    """

    def check() -> T:
        result = supplier()
        if result is None:
            raise UnexpectedResultError("expected data is null", value=result)
        return result

    return Computation(check)


def retry_until_true(supplier: Callable[[], bool]) -> Computation[bool]:
    """Fail while the supplier returns a falsy value.

    Args:
        supplier: The zero-argument callable.

    Returns:
        A computation raising ``UnexpectedResultError("expected data is false")``
        when the supplier returns a falsy value.

    Example:
        ```pycon
        >>> from aretry import retry_until_true
        >>> retry_until_true(lambda: True)()
        True

        ```
    """

    def check() -> bool:
        result = supplier()
        if not result:
            raise UnexpectedResultError("expected data is false", value=result)
        return result

    return Computation(check)


def retry_until_equal(supplier: Callable[[], T | None], expected: T) -> Computation[T]:
    """Fail until the supplier returns a value equal to ``expected``.

    Args:
        supplier: The zero-argument callable.
        expected: The expected value. Must not be None.

    Returns:
        A computation raising ``UnexpectedResultError("expected data and
        actual data are not equal")`` when the supplier returns None or a
        value different from ``expected``.

    Raises:
        ValueError: If expected is None.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry import retry_until_equal
        >>> func = Mock(side_effect=["pending", "pending", "done"])
        >>> retry_until_equal(func, "done").retry(3)()
        'done'

        ```
    """
    validate_not_none(expected, "expected result")

    def check() -> T:
        result = supplier()
        if result is None or result != expected:
            raise UnexpectedResultError("expected data and actual data are not equal", value=result)
        return result

    return Computation(check)


def retry_until_test_ok(
    supplier: Callable[[], T], test: Callable[[T], bool]
) -> Computation[T]:
    """Fail until the value returned by the supplier satisfies ``test``.

    Args:
        supplier: The zero-argument callable.
        test: The predicate applied to each value. Must not be None.

    Returns:
        A computation raising ``UnexpectedResultError("test is not satisfied")``
        when the predicate returns False.

    Raises:
        ValueError: If test is None.

    Example:
        ```pycon
        >>> from unittest.mock import Mock
        >>> from aretry import retry_until_test_ok
        >>> func = Mock(side_effect=[1, 5, 12])
        >>> retry_until_test_ok(func, lambda value: value > 10).retry(3)()
        12

        ```
    """
    validate_not_none(test, "test")

    def check() -> T:
        result = supplier()
        if not test(result):
            raise UnexpectedResultError("test is not satisfied", value=result)
        return result

    return Computation(check)
