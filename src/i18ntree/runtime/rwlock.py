"""Readers-writer lock guarding a workspace's parts and derived caches.

Queries (resolve, lookup_raw, has_locale, ...) read the merged view and the
lookup index together; mutations (merge_fragment, remove_fragment, ...)
replace both. The lock lets any number of queries run concurrently while a
mutation gets exclusive access, so no reader can pair a merged view with an
index built from a different set of parts.

Semantics:
- Shared read access, exclusive write access
- Writer preference: once a writer waits, new readers queue behind it
- Reentrant reads: a thread may nest read() blocks
- No upgrade (read -> write), no downgrade (write -> read), no nested
  write: all three raise RuntimeError instead of deadlocking
- Optional timeout on acquisition (raises TimeoutError)

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared with other readers
        >>> with lock.write():
        ...     pass  # exclusive
    """

    __slots__ = (
        "_condition",
        "_readers",
        "_waiting_writers",
        "_writer",
    )

    def __init__(self) -> None:
        """Initialize an unlocked readers-writer lock."""
        self._condition = threading.Condition(threading.Lock())
        # thread id -> nested read count
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers = 0

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock in shared mode for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits forever, 0.0 never blocks.

        Raises:
            RuntimeError: If the calling thread holds the write lock.
            TimeoutError: If the lock is not acquired within timeout.
            ValueError: If timeout is negative.
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock exclusively for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits forever, 0.0 never blocks.

        Raises:
            RuntimeError: If the calling thread already holds the lock.
            TimeoutError: If the lock is not acquired within timeout.
            ValueError: If timeout is negative.
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    def _wait_until(
        self, ready: Callable[[], bool], timeout: float | None, mode: str
    ) -> None:
        """Wait on the condition until ready() holds (condition already held)."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while not ready():
            if deadline is None:
                self._condition.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                msg = f"Timed out waiting for {mode} lock"
                raise TimeoutError(msg)
            self._condition.wait(timeout=remaining)

    def _acquire_read(self, timeout: float | None) -> None:
        _check_timeout(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._readers:
                self._readers[me] += 1
                return
            if self._writer == me:
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)

            self._wait_until(
                lambda: self._writer is None and self._waiting_writers == 0,
                timeout,
                "read",
            )
            self._readers[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()

        with self._condition:
            count = self._readers.get(me)
            if count is None:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)
            if count > 1:
                self._readers[me] = count - 1
                return
            del self._readers[me]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        _check_timeout(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._readers:
                msg = "Cannot upgrade read lock to write lock"
                raise RuntimeError(msg)
            if self._writer == me:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                self._wait_until(
                    lambda: not self._readers and self._writer is None,
                    timeout,
                    "write",
                )
                self._writer = me
            finally:
                # Readers blocked on writer preference must re-check after
                # a writer stops waiting, including on timeout.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._writer = None
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding the read lock."""
        with self._condition:
            return len(self._readers)

    @property
    def writer_active(self) -> bool:
        """True if any thread currently holds the write lock."""
        with self._condition:
            return self._writer is not None


def _check_timeout(timeout: float | None) -> None:
    if timeout is not None and timeout < 0:
        msg = f"Timeout must be non-negative, got {timeout}"
        raise ValueError(msg)
