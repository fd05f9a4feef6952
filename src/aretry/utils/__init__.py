r"""Utility functions shared by the retry engines."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "correlation_scope",
    "get_correlation_id",
    "log_structured",
    "reset_correlation_id",
    "set_correlation_id",
]

from aretry.utils.structured_logging import (
    StructuredFormatter,
    correlation_scope,
    get_correlation_id,
    log_structured,
    reset_correlation_id,
    set_correlation_id,
)
