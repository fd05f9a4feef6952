r"""Process-wide default worker pool.

The async engine and the async delivery submit their work to a worker
pool. When the caller does not provide one, a single pool shared by the
whole process is created on first use.

The default pool is a ``CachedThreadPoolExecutor``: it has no upper
bound on its number of threads and starts a new one whenever no worker
is idle. An abandoned attempt that never returns keeps its thread, but
it never delays the work submitted after it.

Example:
    ```pycon
    >>> from concurrent.futures import ThreadPoolExecutor
    >>> from aretry.pool import get_default_executor, set_default_executor
    >>> with ThreadPoolExecutor(max_workers=2) as pool:
    ...     previous = set_default_executor(pool)
    ...     get_default_executor() is pool
    ...     _ = set_default_executor(previous)
    ...
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "CachedThreadPoolExecutor",
    "get_default_executor",
    "set_default_executor",
    "shutdown_default_executor",
]

import itertools
import logging
import queue
import threading
from concurrent.futures import Executor, Future
from typing import TYPE_CHECKING, Any

from aretry.core.config import DEFAULT_KEEP_ALIVE

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

_lock = threading.Lock()
_default_executor: Executor | None = None


class CachedThreadPoolExecutor(Executor):
    """Thread pool that grows on demand and shrinks when idle.

    A submitted task is handed to an idle worker when there is one,
    otherwise a new worker thread is started for it, so a task never
    waits for a busy worker. Workers left idle for ``keep_alive``
    seconds exit. Worker threads are daemon threads, so an attempt
    blocked forever does not prevent the interpreter from exiting.

    Args:
        keep_alive: Seconds an idle worker waits for work before exiting.
        thread_name_prefix: Prefix of the worker thread names.

    Raises:
        ValueError: If keep_alive is not positive.

    Example:
        ```pycon
        >>> from aretry.pool import CachedThreadPoolExecutor
        >>> pool = CachedThreadPoolExecutor(keep_alive=1.0)
        >>> pool.submit(lambda: "cat").result()
        'cat'
        >>> pool.shutdown()

        ```
    """

    def __init__(
        self, keep_alive: float = DEFAULT_KEEP_ALIVE, thread_name_prefix: str = "aretry"
    ) -> None:
        if keep_alive <= 0:
            msg = f"keep_alive must be > 0, but got {keep_alive}"
            raise ValueError(msg)
        self.keep_alive = keep_alive
        self.thread_name_prefix = thread_name_prefix
        self._work: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        # Workers waiting for work that no queued task is reserved for
        self._idle = 0
        self._threads: set[threading.Thread] = set()
        self._counter = itertools.count()
        self._shutdown = False

    @property
    def num_threads(self) -> int:
        """The number of live worker threads."""
        with self._lock:
            return len(self._threads)

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        with self._lock:
            if self._shutdown:
                msg = "cannot schedule new futures after shutdown"
                raise RuntimeError(msg)
            future: Future = Future()
            self._work.put((future, fn, args, kwargs))
            if self._idle > 0:
                self._idle -= 1
            else:
                self._start_worker()
            return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        with self._lock:
            self._shutdown = True
            if cancel_futures:
                self._cancel_pending()
            threads = list(self._threads)
            for _ in threads:
                self._work.put(None)
        if wait:
            for thread in threads:
                thread.join()

    def _start_worker(self) -> None:
        name = f"{self.thread_name_prefix}_{next(self._counter)}"
        thread = threading.Thread(target=self._run_worker, name=name, daemon=True)
        self._threads.add(thread)
        thread.start()
        logger.debug(f"Started worker {name} ({len(self._threads)} live)")

    def _cancel_pending(self) -> None:
        while True:
            try:
                item = self._work.get_nowait()
            except queue.Empty:
                return
            if item is not None:
                item[0].cancel()

    def _run_worker(self) -> None:
        try:
            while True:
                try:
                    item = self._work.get(timeout=self.keep_alive)
                except queue.Empty:
                    if self._retire():
                        return
                    continue
                if item is None:
                    return
                future, fn, args, kwargs = item
                if future.set_running_or_notify_cancel():
                    try:
                        result = fn(*args, **kwargs)
                    except BaseException as exc:
                        future.set_exception(exc)
                    else:
                        future.set_result(result)
                del item, future
                with self._lock:
                    self._idle += 1
        finally:
            with self._lock:
                self._threads.discard(threading.current_thread())

    def _retire(self) -> bool:
        """Decide whether a worker that timed out waiting may exit.

        A worker may exit only while an idle worker is counted. Otherwise
        every waiting worker is reserved for a queued task, and this one
        keeps waiting for it.
        """
        with self._lock:
            if self._idle > 0:
                self._idle -= 1
                return True
            return False


def get_default_executor() -> Executor:
    """Return the process-wide worker pool, creating it if needed.

    Returns:
        The default executor.
    """
    global _default_executor  # noqa: PLW0603
    with _lock:
        if _default_executor is None:
            logger.debug("Creating default worker pool")
            _default_executor = CachedThreadPoolExecutor()
        return _default_executor


def set_default_executor(executor: Executor | None) -> Executor | None:
    """Replace the process-wide worker pool.

    The previous pool is not shut down. Passing None resets the default
    so that a fresh pool is created on next use.

    Args:
        executor: The executor to use by default, or None.

    Returns:
        The previous default executor, or None if none was created.
    """
    global _default_executor  # noqa: PLW0603
    with _lock:
        previous = _default_executor
        _default_executor = executor
        return previous


def shutdown_default_executor(wait: bool = True) -> None:
    """Shut down the process-wide worker pool if it was created.

    Args:
        wait: Whether to wait for the running attempts to finish.
    """
    executor = set_default_executor(None)
    if executor is not None:
        logger.debug("Shutting down default worker pool")
        executor.shutdown(wait=wait)
