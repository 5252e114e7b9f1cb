"""
Tests for the exclusive bin lock.
"""

import signal

import pytest

from recyclebin.core.bin.errors import BinBusyError
from recyclebin.core.bin.lock import BinLock


@pytest.fixture
def lock_path(tmp_path):
    return tmp_path / "bin" / "lockfile"


class TestBinLock:
    def test_acquire_and_release(self, lock_path):
        lock = BinLock(lock_path, install_signal_handlers=False)
        lock.acquire()
        assert lock.held
        lock.release()
        assert not lock.held

    def test_second_holder_is_rejected(self, lock_path):
        # flock is per open file description, so a second lock in the same
        # process contends like another process would
        first = BinLock(lock_path, install_signal_handlers=False)
        second = BinLock(lock_path, install_signal_handlers=False)
        with first:
            with pytest.raises(BinBusyError):
                second.acquire()
            assert not second.held

    def test_available_again_after_release(self, lock_path):
        with BinLock(lock_path, install_signal_handlers=False):
            pass
        with BinLock(lock_path, install_signal_handlers=False) as lock:
            assert lock.held

    def test_released_when_block_raises(self, lock_path):
        with pytest.raises(RuntimeError):
            with BinLock(lock_path, install_signal_handlers=False):
                raise RuntimeError("boom")
        with BinLock(lock_path, install_signal_handlers=False) as lock:
            assert lock.held

    def test_lockfile_left_in_place(self, lock_path):
        with BinLock(lock_path, install_signal_handlers=False):
            pass
        assert lock_path.exists()

    def test_release_without_acquire_is_noop(self, lock_path):
        BinLock(lock_path).release()

    def test_signal_handlers_installed_and_restored(self, lock_path):
        before = signal.getsignal(signal.SIGTERM)
        lock = BinLock(lock_path)
        with lock:
            assert signal.getsignal(signal.SIGTERM) == lock._handle_signal
        assert signal.getsignal(signal.SIGTERM) == before

    def test_signal_exits_with_conventional_status(self, lock_path):
        lock = BinLock(lock_path, install_signal_handlers=False)
        with pytest.raises(SystemExit) as exc_info:
            lock._handle_signal(signal.SIGINT, None)
        assert exc_info.value.code == 130

    def test_interrupt_inside_block_releases_lock(self, lock_path):
        with pytest.raises(SystemExit):
            with BinLock(lock_path) as lock:
                lock._handle_signal(signal.SIGTERM, None)
        with BinLock(lock_path, install_signal_handlers=False) as again:
            assert again.held
