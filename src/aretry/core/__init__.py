r"""Core shared definitions for the sync and async retry engines.

This module contains the constants, time units and validation helpers
used by both engines and by the result adapters.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_KEEP_ALIVE",
    "DEFAULT_TIME_UNIT",
    "POLL_INTERVAL",
    "TimeUnit",
    "validate_duration",
    "validate_max_attempts",
    "validate_not_none",
]

from aretry.core.config import DEFAULT_KEEP_ALIVE, DEFAULT_TIME_UNIT, POLL_INTERVAL
from aretry.core.units import TimeUnit
from aretry.core.validation import validate_duration, validate_max_attempts, validate_not_none
