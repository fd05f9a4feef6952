r"""JSON rendering of the engines' attempt records.

The engines log every failed or abandoned attempt at DEBUG level and
attach the attempt number, the policy, whether the attempt timed out and
the error of a failed attempt to the record. ``StructuredFormatter``
renders these records as one JSON object per line, tagged with the
correlation id of the run when one is set.

The correlation id lives in a context variable. The async engine runs
each attempt in a copy of the caller's context, so records emitted from
worker threads carry the id of the run that submitted them.

Example:
    ```python
    import logging

    from aretry import poll_async
    from aretry.utils.structured_logging import StructuredFormatter, correlation_scope

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("aretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    with correlation_scope("job-123"):
        poll_async(fetch_status, 5000)()
    ```
"""

from __future__ import annotations

__all__ = [
    "ATTEMPT_FIELDS",
    "StructuredFormatter",
    "correlation_scope",
    "get_correlation_id",
    "log_structured",
    "reset_correlation_id",
    "set_correlation_id",
]

import contextvars
import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

# Extra fields attached by the engines to attempt records
ATTEMPT_FIELDS = ("attempt", "policy", "timed_out", "error")

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aretry_correlation_id", default=None
)


def get_correlation_id() -> str | None:
    """Return the correlation id of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> contextvars.Token:
    """Set the correlation id of the current context.

    Args:
        correlation_id: The id tagging the records of a run, or None to
            remove it.

    Returns:
        A token that restores the previous id when passed to
        ``reset_correlation_id``.
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Tag the records emitted inside the block with a correlation id.

    The previous id is restored on exit.

    Args:
        correlation_id: The id tagging the records of the block.

    Yields:
        The correlation id.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import correlation_scope, get_correlation_id
        >>> with correlation_scope("job-1"):
        ...     get_correlation_id()
        ...
        'job-1'
        >>> get_correlation_id() is None
        True

        ```
    """
    token = set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        reset_correlation_id(token)


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Every object has the keys ``time`` (ISO 8601, UTC, milliseconds),
    ``level``, ``logger``, ``thread`` and ``message``. The keys below are
    added only when present:

    - ``correlation_id``: the id of the emitting context.
    - the extra fields listed in ``fields``, by default the attempt
      fields of the engines. An exception value is rendered as
      ``"TypeName: message"``; other values that JSON cannot encode are
      rendered with ``str``.
    - ``exception``: the formatted traceback of ``logger.exception``.

    Args:
        fields: Names of the extra record fields to include.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> record = logging.makeLogRecord(
        ...     {"name": "aretry", "levelname": "DEBUG", "msg": "Attempt failed", "attempt": 2}
        ... )
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["attempt"], data["message"]
        (2, 'Attempt failed')

        ```
    """

    def __init__(self, fields: Sequence[str] = ATTEMPT_FIELDS) -> None:
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            data["correlation_id"] = correlation_id
        for name in self.fields:
            if hasattr(record, name):
                data[name] = _render(getattr(record, name))
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def _render(value: Any) -> Any:
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    return value


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with extra record fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Fields attached to the record, rendered by
            ``StructuredFormatter`` when listed in its fields.
    """
    logger.log(level, message, extra=extra, stacklevel=2)
