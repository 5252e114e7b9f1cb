"""
Payload area: the directory holding relocated items, one entry per ID.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from recyclebin.core.bin.fsutil import remove_entry
from recyclebin.core.records.models import ItemKind

logger = logging.getLogger(__name__)


class PayloadArea:
    """
    Storage for captured bytes, addressed by record ID.

    Example:
        >>> payloads = PayloadArea(Path("~/.recycle_bin/files").expanduser())
        >>> payloads.store(Path("notes.txt"), "1730300000000000000_4242", ItemKind.FILE)
        >>> payloads.exists("1730300000000000000_4242")
        True
    """

    def __init__(self, files_dir: Path):
        self.files_dir = Path(files_dir)

    def path_for(self, record_id: str) -> Path:
        return self.files_dir / record_id

    def exists(self, record_id: str) -> bool:
        """True if an entry (including a dangling symlink) exists for the ID."""
        return os.path.lexists(self.path_for(record_id))

    def entries(self) -> list[str]:
        """Names of every payload entry, sorted."""
        if not self.files_dir.is_dir():
            return []
        return sorted(os.listdir(self.files_dir))

    def store(self, source: Path, record_id: str, kind: ItemKind) -> Path:
        """
        Move ``source`` into the area under ``record_id``.

        Symlinks are re-created here and then the original link is removed,
        since moving a link across filesystems can copy its target instead.

        Raises:
            OSError: If the item cannot be relocated
        """
        self.files_dir.mkdir(parents=True, exist_ok=True)
        destination = self.path_for(record_id)

        if kind is ItemKind.SYMLINK:
            os.symlink(os.readlink(source), destination)
            try:
                os.unlink(source)
            except OSError:
                os.unlink(destination)
                raise
        else:
            shutil.move(os.fspath(source), os.fspath(destination))

        return destination

    def release(self, record_id: str, destination: Path) -> Path:
        """
        Move the payload for ``record_id`` out to ``destination``.

        The destination must not exist; callers resolve conflicts first.

        Raises:
            OSError: If the payload cannot be moved
        """
        source = self.path_for(record_id)
        if os.path.islink(source):
            os.symlink(os.readlink(source), destination)
            os.unlink(source)
        else:
            shutil.move(os.fspath(source), os.fspath(destination))
        return destination

    def discard(self, record_id: str) -> bool:
        """
        Permanently delete the payload for ``record_id``.

        Returns:
            False if there was nothing to delete

        Raises:
            OSError: If the payload exists but cannot be deleted
        """
        path = self.path_for(record_id)
        if not os.path.lexists(path):
            return False
        remove_entry(path)
        return True

    def clear(self) -> int:
        """
        Delete every payload entry.

        Returns:
            Number of entries removed

        Raises:
            OSError: If an entry cannot be deleted
        """
        removed = 0
        for name in self.entries():
            remove_entry(self.files_dir / name)
            removed += 1
        return removed
