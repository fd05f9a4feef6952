r"""Unit tests for callback manager."""

from __future__ import annotations

import time
from unittest.mock import Mock

from aretry.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
from aretry.engine import AttemptPolicy, CallbackConfig, CallbackManager, TimePolicy


def test_callback_manager_creation() -> None:
    """Test CallbackManager initialization."""
    config = CallbackConfig()
    policy = AttemptPolicy(3)
    manager = CallbackManager(config, policy)
    assert manager.callbacks is config
    assert manager.policy is policy


def test_callback_manager_on_attempt() -> None:
    """Test on_attempt callback invocation with a 1-indexed attempt."""
    on_attempt = Mock()
    policy = AttemptPolicy(3)
    manager = CallbackManager(CallbackConfig(on_attempt=on_attempt), policy)
    manager.on_attempt(0)
    on_attempt.assert_called_once_with(AttemptInfo(attempt=1, policy=policy))


def test_callback_manager_on_retry() -> None:
    """Test on_retry callback invocation."""
    on_retry = Mock()
    policy = TimePolicy(1000)
    error = ValueError("boom")
    manager = CallbackManager(CallbackConfig(on_retry=on_retry), policy)
    manager.on_retry(1, error, timed_out=False, wait_time=0.5)
    on_retry.assert_called_once_with(
        RetryInfo(attempt=2, policy=policy, error=error, timed_out=False, wait_time=0.5)
    )


def test_callback_manager_on_success() -> None:
    """Test on_success callback invocation."""
    on_success = Mock()
    policy = AttemptPolicy(3)
    manager = CallbackManager(CallbackConfig(on_success=on_success), policy)
    manager.on_success(2, time.monotonic())
    info = on_success.call_args.args[0]
    assert isinstance(info, SuccessInfo)
    assert info.attempt == 3
    assert info.policy is policy
    assert info.total_time >= 0


def test_callback_manager_on_failure() -> None:
    """Test on_failure callback invocation."""
    on_failure = Mock()
    policy = TimePolicy(1000)
    error = ValueError("boom")
    manager = CallbackManager(CallbackConfig(on_failure=on_failure), policy)
    manager.on_failure(4, error, timed_out=True, start_time=time.monotonic())
    info = on_failure.call_args.args[0]
    assert isinstance(info, FailureInfo)
    assert info.attempt == 4
    assert info.error is error
    assert info.timed_out
    assert info.total_time >= 0


def test_callback_manager_without_callbacks() -> None:
    """Test that every hook is a no-op when no callback is configured."""
    manager = CallbackManager(CallbackConfig(), AttemptPolicy(1))
    manager.on_attempt(0)
    manager.on_retry(0, None, timed_out=True, wait_time=0.0)
    manager.on_success(0, time.monotonic())
    manager.on_failure(1, ValueError("boom"), timed_out=False, start_time=time.monotonic())
