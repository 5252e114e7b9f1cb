"""
Preview of a recycled item's contents without restoring it.
"""

from __future__ import annotations

import logging
import mimetypes
import os
from dataclasses import dataclass, field

from recyclebin.core.bin.errors import NotFoundError, PayloadMissingError
from recyclebin.core.payload.area import PayloadArea
from recyclebin.core.records.models import ItemKind, Record
from recyclebin.core.records.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_LINES = 10
_SNIFF_BYTES = 8192
# Non-text mime types that are still readable as text
_TEXT_LIKE_TYPES = {"application/json", "application/xml", "application/x-sh"}


@dataclass
class Preview:
    """What the preview command shows for one record."""

    record: Record
    mime_type: str
    is_text: bool
    lines: list[str] = field(default_factory=list)
    truncated: bool = False
    entries: list[str] = field(default_factory=list)


def _looks_like_text(path: os.PathLike[str] | str, mime_type: str | None) -> bool:
    try:
        with open(path, "rb") as f:
            chunk = f.read(_SNIFF_BYTES)
    except OSError:
        return False
    if b"\x00" in chunk:
        return False
    if mime_type and (mime_type.startswith("text/") or mime_type in _TEXT_LIKE_TYPES):
        return True
    try:
        chunk.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte character cut at the sniff boundary is still text
        return e.start >= len(chunk) - 3
    return True


def preview(
    store: RecordStore,
    payloads: PayloadArea,
    record_id: str,
    max_lines: int = DEFAULT_PREVIEW_LINES,
) -> Preview:
    """
    Build a preview for the record with exact ID ``record_id``.

    Text files yield their first ``max_lines`` lines, directories their
    top-level entries, anything else only its type.

    Raises:
        NotFoundError: No record has this ID
        PayloadMissingError: The record's payload is gone
    """
    try:
        record = store.get(record_id)
    except NotFoundError as e:
        logger.error("Preview failed: %s", e)
        raise
    path = payloads.path_for(record.id)

    if not payloads.exists(record.id):
        logger.error("Preview failed: missing payload for %s (%s)", record.original_name, record.id)
        raise PayloadMissingError(record.id, record.original_name)

    if record.kind is ItemKind.DIRECTORY:
        result = Preview(record=record, mime_type="inode/directory", is_text=False)
        result.entries = sorted(os.listdir(path))
    elif record.kind is ItemKind.SYMLINK:
        result = Preview(record=record, mime_type="inode/symlink", is_text=False)
        result.entries = [os.readlink(path)]
    else:
        guessed, _ = mimetypes.guess_type(record.original_name)
        is_text = _looks_like_text(path, guessed)
        mime_type = guessed or ("text/plain" if is_text else "application/octet-stream")
        result = Preview(record=record, mime_type=mime_type, is_text=is_text)
        if is_text:
            with open(path, encoding="utf-8", errors="replace") as f:
                for line in f:
                    if len(result.lines) >= max_lines:
                        result.truncated = True
                        break
                    result.lines.append(line.rstrip("\n"))

    logger.info("Previewed %s (%s) type=%s", record.original_name, record.id, result.mime_type)
    return result
