"""
On-disk layout of a recycle bin.

A bin root holds:
    files/           payload entries, one per record, named by ID
    metadata.db      record store (CSV with header)
    config           key=value settings
    recyclebin.log   append-only operation log
    lockfile         sentinel for the exclusive bin lock
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

METADATA_HEADER = (
    "ID",
    "ORIGINAL_NAME",
    "ORIGINAL_PATH",
    "DELETION_DATE",
    "FILE_SIZE",
    "FILE_TYPE",
    "PERMISSIONS",
    "OWNER",
)

DEFAULT_CONFIG_TEXT = "MAX_SIZE_MB=1024\nRETENTION_DAYS=30\n"

DEFAULT_BIN_DIRNAME = ".recycle_bin"


@dataclass(frozen=True)
class BinLayout:
    """Paths that make up a recycle bin rooted at ``root``."""

    root: Path

    @property
    def files_dir(self) -> Path:
        return self.root / "files"

    @property
    def metadata_file(self) -> Path:
        return self.root / "metadata.db"

    @property
    def config_file(self) -> Path:
        return self.root / "config"

    @property
    def log_file(self) -> Path:
        return self.root / "recyclebin.log"

    @property
    def lock_file(self) -> Path:
        return self.root / "lockfile"

    def is_initialized(self) -> bool:
        return self.files_dir.is_dir() and self.metadata_file.is_file()

    def initialize(self) -> list[Path]:
        """
        Create any missing part of the bin.

        Existing files are never overwritten. Directories are restricted to
        the owner (0700) since payloads keep their original contents.

        Returns:
            Paths that were created by this call
        """
        created: list[Path] = []

        for directory in (self.root, self.files_dir):
            if not directory.is_dir():
                directory.mkdir(parents=True, exist_ok=True)
                created.append(directory)
            try:
                os.chmod(directory, 0o700)
            except OSError as e:
                logger.debug("Could not restrict permissions on %s: %s", directory, e)

        if not self.metadata_file.exists() or self.metadata_file.stat().st_size == 0:
            self.metadata_file.write_text(",".join(METADATA_HEADER) + "\n", encoding="utf-8")
            created.append(self.metadata_file)

        if not self.config_file.exists():
            self.config_file.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
            created.append(self.config_file)

        if not self.log_file.exists():
            self.log_file.touch()
            created.append(self.log_file)

        return created


def default_bin_root() -> Path:
    """Return the bin root used when neither option nor environment names one."""
    if env_dir := os.environ.get("RECYCLEBIN_DIR"):
        return Path(env_dir).expanduser()
    return Path.home() / DEFAULT_BIN_DIRNAME
