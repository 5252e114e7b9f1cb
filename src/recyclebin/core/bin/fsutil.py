"""
Filesystem helpers shared by capture, recall and purge.

Sizes and kinds are always taken with ``lstat`` so a symlink describes
itself and never its target.
"""

from __future__ import annotations

import grp
import os
import pwd
import shutil
import stat
from pathlib import Path

from recyclebin.core.records.models import ItemKind


def classify(path: Path) -> ItemKind:
    """Return the kind of ``path`` without following a final symlink."""
    mode = os.lstat(path).st_mode
    if stat.S_ISLNK(mode):
        return ItemKind.SYMLINK
    if stat.S_ISDIR(mode):
        return ItemKind.DIRECTORY
    return ItemKind.FILE


def tree_size(path: Path) -> int:
    """Sum the bytes of every entry below ``path``, without following symlinks."""
    total = 0
    for dirpath, dirnames, filenames in os.walk(path, followlinks=False):
        # Symlinked directories appear in dirnames but are not descended into
        for name in filenames + [d for d in dirnames if os.path.islink(os.path.join(dirpath, d))]:
            try:
                total += os.lstat(os.path.join(dirpath, name)).st_size
            except OSError:
                continue
    return total


def item_size(path: Path, kind: ItemKind) -> int:
    """Size of an item as recorded in the store."""
    if kind is ItemKind.DIRECTORY:
        return tree_size(path)
    return os.lstat(path).st_size


def free_bytes(path: Path) -> int:
    """Free bytes on the filesystem holding ``path`` (or its nearest existing parent)."""
    probe = Path(path)
    while not probe.exists() and probe != probe.parent:
        probe = probe.parent
    return shutil.disk_usage(probe).free


def mode_string(st: os.stat_result) -> str:
    """Permission bits in the octal form ``stat -c %a`` prints (e.g. ``644``)."""
    return format(stat.S_IMODE(st.st_mode), "o")


def owner_string(st: os.stat_result) -> str:
    """``user:group`` for a stat result, falling back to numeric ids."""
    try:
        user = pwd.getpwuid(st.st_uid).pw_name
    except KeyError:
        user = str(st.st_uid)
    try:
        group = grp.getgrgid(st.st_gid).gr_name
    except KeyError:
        group = str(st.st_gid)
    return f"{user}:{group}"


def resolve_owner(owner: str) -> tuple[int, int] | None:
    """Turn a recorded ``user:group`` back into numeric ids, or None if unknown."""
    user, sep, group = owner.partition(":")
    if not sep:
        return None
    try:
        uid = int(user) if user.isdigit() else pwd.getpwnam(user).pw_uid
        gid = int(group) if group.isdigit() else grp.getgrnam(group).gr_gid
    except KeyError:
        return None
    return uid, gid


def remove_entry(path: Path) -> None:
    """Delete a file, symlink or whole directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def is_within(path: Path, ancestor: Path) -> bool:
    """True if ``path`` equals ``ancestor`` or lies below it."""
    try:
        path.relative_to(ancestor)
    except ValueError:
        return False
    return True
