r"""Engine package implementing the retry engines.

This package provides the building blocks of the retrying computations:
policies, configuration, per-run state and the sync and async engines.

Public API:
    - AttemptPolicy / TimePolicy: The two policy shapes
    - RetryConfig: Configuration shared by every policy shape
    - CallbackConfig: Configuration for callbacks
    - CallbackManager: Manager for callback invocations
    - ExecutionState: Transient state of one engine run
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Worker-pool based retry executor
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AttemptPolicy",
    "CallbackConfig",
    "CallbackManager",
    "ExecutionState",
    "RetryConfig",
    "RetryExecutor",
    "RetryPolicy",
    "TimePolicy",
]

from aretry.engine.config import CallbackConfig, RetryConfig
from aretry.engine.executor import RetryExecutor
from aretry.engine.executor_async import AsyncRetryExecutor
from aretry.engine.manager import CallbackManager
from aretry.engine.policy import AttemptPolicy, RetryPolicy, TimePolicy
from aretry.engine.state import ExecutionState
