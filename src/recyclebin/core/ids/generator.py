"""
Identifier generation for captured items.

IDs have the form ``<nanoseconds>_<pid>``, e.g. ``1730300000123456789_4242``.
The nanosecond part is forced to increase strictly within one generator, so
two captures issued back to back by the same process never share an ID even
if the clock has not advanced between them. The process id separates
concurrent processes.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable


class IdGenerator:
    """
    Produces IDs unique for the lifetime of the process.

    Example:
        >>> ids = IdGenerator()
        >>> first, second = ids.next_id(), ids.next_id()
        >>> first != second
        True
    """

    def __init__(
        self,
        clock: Callable[[], int] = time.time_ns,
        pid: int | None = None,
    ) -> None:
        """
        Args:
            clock: Nanosecond clock (injectable for tests)
            pid: Process id to embed (defaults to the current process)
        """
        self._clock = clock
        self._pid = os.getpid() if pid is None else pid
        self._last_ns = 0

    def next_id(self) -> str:
        """Return a new ID, strictly later than every ID this instance issued."""
        now = self._clock()
        if now <= self._last_ns:
            now = self._last_ns + 1
        self._last_ns = now
        return f"{now}_{self._pid}"
