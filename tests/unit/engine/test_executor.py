r"""Unit tests for synchronous retry executor."""

from __future__ import annotations

import threading
import time
from unittest.mock import Mock

import pytest

from aretry.callbacks import FailureInfo, RetryInfo
from aretry.core import TimeUnit
from aretry.engine import AttemptPolicy, CallbackConfig, RetryConfig, RetryExecutor, TimePolicy
from tests.helpers import CountingComputation


def test_retry_executor_creation() -> None:
    """Test RetryExecutor initialization."""
    config = RetryConfig()
    policy = AttemptPolicy(3)
    executor = RetryExecutor(config, policy)
    assert executor.config is config
    assert executor.policy is policy
    assert executor.callbacks.policy is policy


def test_retry_executor_unsupported_policy() -> None:
    """Test that an unknown policy shape is rejected."""
    executor = RetryExecutor(RetryConfig(), "forever")  # type: ignore[arg-type]
    with pytest.raises(TypeError, match=r"Unsupported retry policy"):
        executor.execute(lambda: 1)


######################################
#     Tests for attempt policies     #
######################################


def test_retry_executor_attempts_first_success() -> None:
    """Test that a successful first attempt is returned without retry."""
    func = CountingComputation("cat")
    assert RetryExecutor(RetryConfig(), AttemptPolicy(3)).execute(func) == "cat"
    assert func.calls == 1


def test_retry_executor_attempts_success_after_failures() -> None:
    """Test that the first success after failures is returned."""
    func = CountingComputation(ValueError("a"), ValueError("b"), "cat")
    assert RetryExecutor(RetryConfig(), AttemptPolicy(3)).execute(func) == "cat"
    assert func.calls == 3


def test_retry_executor_attempts_raises_last_error() -> None:
    """Test that the most recent error is raised once attempts are exhausted."""
    func = CountingComputation(ValueError("first"), ValueError("second"))
    with pytest.raises(ValueError, match=r"second"):
        RetryExecutor(RetryConfig(), AttemptPolicy(2)).execute(func)
    assert func.calls == 2


def test_retry_executor_attempts_error_override() -> None:
    """Test that the error override replaces the last error."""
    func = CountingComputation(ValueError("boom"))
    config = RetryConfig(error_override=lambda: RuntimeError("Custom error"))
    with pytest.raises(RuntimeError, match=r"Custom error") as exc_info:
        RetryExecutor(config, AttemptPolicy(2)).execute(func)
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_retry_executor_attempts_zero() -> None:
    """Test that no attempt is made and None is returned for 0 attempts."""
    func = CountingComputation("cat")
    config = RetryConfig(error_override=lambda: RuntimeError("Custom error"))
    assert RetryExecutor(config, AttemptPolicy(0)).execute(func) is None
    assert func.calls == 0


def test_retry_executor_attempts_none_is_a_success() -> None:
    """Test that None returned by the computation is a success."""
    func = CountingComputation(None, "cat")
    assert RetryExecutor(RetryConfig(), AttemptPolicy(3)).execute(func) is None
    assert func.calls == 1


def test_retry_executor_attempts_no_sleep(mock_sleep: Mock) -> None:
    """Test that attempt-bounded retries do not pause between attempts."""
    func = CountingComputation(ValueError("boom"), "cat")
    RetryExecutor(RetryConfig(), AttemptPolicy(2)).execute(func)
    mock_sleep.assert_not_called()


def test_retry_executor_attempts_runs_on_caller_thread() -> None:
    """Test that attempts run on the calling thread."""
    threads = []

    def func() -> str:
        threads.append(threading.current_thread())
        return "cat"

    RetryExecutor(RetryConfig(), AttemptPolicy(1)).execute(func)
    assert threads == [threading.current_thread()]


def test_retry_executor_attempts_base_exception_propagates() -> None:
    """Test that non-Exception errors are not retried."""
    func = CountingComputation(KeyboardInterrupt())
    with pytest.raises(KeyboardInterrupt):
        RetryExecutor(RetryConfig(), AttemptPolicy(3)).execute(func)
    assert func.calls == 1


def test_retry_executor_attempts_callbacks(mock_callback: Mock) -> None:
    """Test the callbacks invoked along an attempt-bounded run."""
    on_attempt, on_retry, on_success = mock_callback, Mock(), Mock()
    config = RetryConfig(
        callbacks=CallbackConfig(on_attempt=on_attempt, on_retry=on_retry, on_success=on_success)
    )
    func = CountingComputation(ValueError("boom"), "cat")
    RetryExecutor(config, AttemptPolicy(3)).execute(func)
    assert on_attempt.call_count == 2
    info = on_retry.call_args.args[0]
    assert isinstance(info, RetryInfo)
    assert info.attempt == 1
    assert str(info.error) == "boom"
    assert info.wait_time == 0.0
    assert on_success.call_args.args[0].attempt == 2


def test_retry_executor_attempts_on_failure(mock_callback: Mock) -> None:
    """Test that on_failure receives the error about to be raised."""
    config = RetryConfig(callbacks=CallbackConfig(on_failure=mock_callback))
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(config, AttemptPolicy(2)).execute(CountingComputation(ValueError("boom")))
    info = mock_callback.call_args.args[0]
    assert isinstance(info, FailureInfo)
    assert info.attempt == 2
    assert str(info.error) == "boom"


###################################
#     Tests for time policies     #
###################################


def test_retry_executor_poll_first_success() -> None:
    """Test that a successful first attempt is returned without sleep."""
    func = CountingComputation("cat")
    assert RetryExecutor(RetryConfig(), TimePolicy(1, TimeUnit.SECONDS)).execute(func) == "cat"
    assert func.calls == 1


def test_retry_executor_poll_success_after_failures(short_poll_interval: float) -> None:
    """Test that polling continues until the computation succeeds."""
    func = CountingComputation(ValueError("a"), ValueError("b"), "cat")
    assert RetryExecutor(RetryConfig(), TimePolicy(2, TimeUnit.SECONDS)).execute(func) == "cat"
    assert func.calls == 3
    gaps = [b - a for a, b in zip(func.call_times, func.call_times[1:])]
    assert all(gap >= short_poll_interval - 1e-3 for gap in gaps)


def test_retry_executor_poll_raises_last_error(short_poll_interval: float) -> None:
    """Test that the last error is raised once the deadline passed."""
    func = CountingComputation(ValueError("boom"))
    start = time.monotonic()
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(RetryConfig(), TimePolicy(300)).execute(func)
    assert time.monotonic() - start >= 0.3 - 1e-3
    assert func.calls >= 2


def test_retry_executor_poll_error_override(short_poll_interval: float) -> None:
    """Test that the error override replaces the last error."""
    config = RetryConfig(error_override=lambda: RuntimeError("Custom error"))
    with pytest.raises(RuntimeError, match=r"Custom error"):
        RetryExecutor(config, TimePolicy(100)).execute(CountingComputation(ValueError("boom")))


@pytest.mark.parametrize("duration", [0, -100])
def test_retry_executor_poll_non_positive_duration(duration: int) -> None:
    """Test that no attempt is made and None is returned without budget."""
    func = CountingComputation("cat")
    assert RetryExecutor(RetryConfig(), TimePolicy(duration)).execute(func) is None
    assert func.calls == 0


def test_retry_executor_poll_sleep_clamped_to_deadline(mock_sleep: Mock) -> None:
    """Test that the pause never exceeds the time left before the deadline."""
    func = CountingComputation(ValueError("boom"))
    with pytest.raises(ValueError, match=r"boom"):
        RetryExecutor(RetryConfig(), TimePolicy(200)).execute(func)
    # The budget is below the interval, the first pause is the last one.
    assert func.calls == 1
    mock_sleep.assert_called_once()
    assert 0.0 <= mock_sleep.call_args.args[0] <= 0.2


def test_retry_executor_poll_on_retry_wait_time(short_poll_interval: float) -> None:
    """Test that on_retry receives the pause before the next check."""
    on_retry = Mock()
    config = RetryConfig(callbacks=CallbackConfig(on_retry=on_retry))
    func = CountingComputation(ValueError("boom"), "cat")
    RetryExecutor(config, TimePolicy(5, TimeUnit.SECONDS)).execute(func)
    info = on_retry.call_args.args[0]
    assert info.wait_time == short_poll_interval
    assert not info.timed_out


def test_retry_executor_poll_runs_on_caller_thread(short_poll_interval: float) -> None:
    """Test that polling attempts run on the calling thread."""
    threads = []

    def func() -> str:
        threads.append(threading.current_thread())
        if len(threads) < 2:
            msg = "not ready"
            raise RuntimeError(msg)
        return "ready"

    assert RetryExecutor(RetryConfig(), TimePolicy(2000)).execute(func) == "ready"
    assert threads == [threading.current_thread()] * 2
