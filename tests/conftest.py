from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def short_poll_interval(monkeypatch: pytest.MonkeyPatch) -> float:
    """Shrink the spacing between polling attempts to 50 ms."""
    monkeypatch.setattr("aretry.core.config.POLL_INTERVAL", 0.05)
    return 0.05


@pytest.fixture
def executor() -> Generator[ThreadPoolExecutor, None, None]:
    """Create a dedicated worker pool, shut down after the test."""
    pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="test")
    yield pool
    pool.shutdown(wait=False, cancel_futures=True)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks.

    Returns:
        A Mock object that can be used as a callback function.
    """
    return Mock()
