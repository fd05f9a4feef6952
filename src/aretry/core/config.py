r"""Default values shared by the retry engines.

This module groups the constants that govern the engines so that sync
and async implementations stay consistent.
"""

from __future__ import annotations

__all__ = ["DEFAULT_KEEP_ALIVE", "DEFAULT_TIME_UNIT", "POLL_INTERVAL"]

from aretry.core.units import TimeUnit

# Minimum spacing in seconds between two attempts of a time-bounded policy.
# It is measured from the end of a failed attempt to the next deadline check.
POLL_INTERVAL = 0.5

# Unit used for numeric polling durations when none is given
DEFAULT_TIME_UNIT = TimeUnit.MILLISECONDS

# Seconds an idle worker of the process-wide pool waits for work before exiting
DEFAULT_KEEP_ALIVE = 60.0
