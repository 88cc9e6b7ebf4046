"""Tests for the graph reader/writer lock."""

from __future__ import annotations

import threading
import time

import pytest

from build_report import GraphLock


def test_readers_share_the_lock() -> None:
    """Several readers should hold the lock together."""
    lock = GraphLock()
    with lock.read_locked(), lock.read_locked():
        assert lock.readers == 2
        assert not lock.write_held
    assert lock.readers == 0


def test_writer_excludes_readers() -> None:
    """A reader should wait until the writer releases the lock."""
    lock = GraphLock()
    entered = threading.Event()

    def _read() -> None:
        with lock.read_locked():
            entered.set()

    with lock.write_locked():
        assert lock.write_held
        reader = threading.Thread(target=_read)
        reader.start()
        assert not entered.wait(timeout=0.1)
    reader.join(timeout=5)
    assert entered.is_set()


def test_waiting_writer_blocks_new_readers() -> None:
    """New readers should queue behind a waiting writer."""
    lock = GraphLock()
    order: list[str] = []
    writer_waiting = threading.Event()

    def _write() -> None:
        writer_waiting.set()
        with lock.write_locked():
            order.append("writer")

    def _read() -> None:
        with lock.read_locked():
            order.append("reader")

    lock.acquire_read()
    writer = threading.Thread(target=_write)
    writer.start()
    assert writer_waiting.wait(timeout=5)
    for _ in range(100):
        with lock._cond:  # noqa: SLF001
            if lock._writers_waiting:  # noqa: SLF001
                break
        time.sleep(0.01)
    reader = threading.Thread(target=_read)
    reader.start()
    lock.release_read()
    writer.join(timeout=5)
    reader.join(timeout=5)
    assert order == ["writer", "reader"]


def test_release_without_hold_raises() -> None:
    """Releasing an unheld lock should raise."""
    lock = GraphLock()
    with pytest.raises(RuntimeError, match="without a held read lock"):
        lock.release_read()
    with pytest.raises(RuntimeError, match="without a held write lock"):
        lock.release_write()
