r"""Predicate-gated side effects.

Example:
    ```pycon
    >>> from aretry.conditional import accept_if
    >>> seen = []
    >>> consumer = accept_if(seen.append, lambda value: value % 2 == 0)
    >>> for value in range(5):
    ...     consumer(value)
    ...
    >>> seen
    [0, 2, 4]

    ```
"""

from __future__ import annotations

__all__ = ["ConditionalConsumer", "accept_if"]

from typing import TYPE_CHECKING, Generic, TypeVar

from aretry.core.validation import validate_not_none

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def accept_if(
    consumer: Callable[[T], object], predicate: Callable[[T], bool]
) -> Callable[[T], None]:
    """Gate a consumer behind a predicate.

    Args:
        consumer: The side effect to run.
        predicate: The condition tested on every value. Must not be None.

    Returns:
        A consumer calling ``consumer(value)`` only when
        ``predicate(value)`` is true.

    Raises:
        ValueError: If predicate is None.
    """
    validate_not_none(predicate, "predicate")

    def gated(value: T) -> None:
        if predicate(value):
            consumer(value)

    return gated


class ConditionalConsumer(Generic[T]):
    """Builder form of ``accept_if``.

    Args:
        consumer: The side effect to run.

    Example:
        ```pycon
        >>> from aretry.conditional import ConditionalConsumer
        >>> seen = []
        >>> consumer = ConditionalConsumer(seen.append).accept_if(lambda value: value > 1)
        >>> consumer(1)
        >>> consumer(2)
        >>> seen
        [2]

        ```
    """

    def __init__(self, consumer: Callable[[T], object]) -> None:
        self.consumer = consumer

    def __call__(self, value: T) -> None:
        self.consumer(value)

    def accept_if(self, predicate: Callable[[T], bool]) -> Callable[[T], None]:
        return accept_if(self.consumer, predicate)
