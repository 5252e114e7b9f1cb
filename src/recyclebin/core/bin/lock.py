"""
Exclusive whole-bin lock for mutating operations.

The lock is an advisory ``flock`` on the bin's ``lockfile``. A second
invocation that tries to take it while it is held fails immediately with
BinBusyError instead of waiting.

While the lock is held, SIGINT and SIGTERM are turned into SystemExit so
the ``with`` block unwinds and the lock is always released.

Usage:
    >>> from recyclebin.core.bin.lock import BinLock
    >>> with BinLock(layout.lock_file):
    ...     capture_service.capture(paths)
"""

from __future__ import annotations

import fcntl
import logging
import os
import signal
from pathlib import Path
from types import TracebackType
from typing import Any

from recyclebin.core.bin.errors import BinBusyError

logger = logging.getLogger(__name__)

# Exit status for a process killed by a signal: 128 + signal number
_SIGNAL_EXIT_BASE = 128


class BinLock:
    """
    Scoped exclusive lock on a recycle bin.

    Acquired on ``__enter__`` and released on ``__exit__``, including when
    the block exits through an exception or an interrupt signal.

    Attributes:
        path: Sentinel file that carries the advisory lock.
    """

    def __init__(self, path: Path, install_signal_handlers: bool = True) -> None:
        self.path = Path(path)
        self.install_signal_handlers = install_signal_handlers
        self._fd: int | None = None
        self._original_handlers: dict[int, Any] = {}

    @property
    def held(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        """
        Take the lock without blocking.

        Raises:
            BinBusyError: If another process holds the lock
        """
        if self._fd is not None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            os.close(fd)
            logger.error("Recycle Bin is busy: lock held by another process (%s)", self.path)
            raise BinBusyError(
                "Another recycle bin operation is already running"
            ) from None
        except OSError:
            os.close(fd)
            raise

        os.ftruncate(fd, 0)
        os.write(fd, f"{os.getpid()}\n".encode())
        self._fd = fd

        if self.install_signal_handlers:
            self._register_signals()

    def release(self) -> None:
        """Release the lock and restore previous signal handlers."""
        if self._fd is None:
            return

        self._unregister_signals()
        try:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> BinLock:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def _register_signals(self) -> None:
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                self._original_handlers[signum] = signal.signal(signum, self._handle_signal)
            except ValueError:
                # signal.signal only works from the main thread
                logger.debug("Cannot install handler for signal %s outside main thread", signum)

    def _unregister_signals(self) -> None:
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()

    def _handle_signal(self, signum: int, frame: object) -> None:
        # SystemExit unwinds through __exit__, which releases the lock
        logger.warning("Interrupted by signal %s; releasing bin lock", signum)
        raise SystemExit(_SIGNAL_EXIT_BASE + signum)
