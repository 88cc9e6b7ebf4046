"""Reader/writer lock shared by the build scheduler and reporting."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class GraphLock:
    """Shared lock guarding the package graph and its build state.

    Any number of readers may hold the lock together. A writer holds it
    exclusively, and once a writer is waiting new readers queue behind it so
    that repeated summary reports cannot starve the scheduler.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        """Return the number of readers currently holding the lock."""
        return self._readers

    @property
    def write_held(self) -> bool:
        """Return whether a writer currently holds the lock."""
        return self._writer

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                msg = "release_read called without a held read lock."
                raise RuntimeError(msg)
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                msg = "release_write called without a held write lock."
                raise RuntimeError(msg)
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared side of the lock for the duration of the block.

        Yields
        ------
        None
            Control while the read lock is held.
        """
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive side of the lock for the duration of the block.

        Yields
        ------
        None
            Control while the write lock is held.
        """
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


__all__ = ["GraphLock"]
