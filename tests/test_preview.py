"""
Tests for previewing recycled items.
"""

import os

import pytest

from recyclebin.core.bin.errors import NotFoundError, PayloadMissingError


class TestPreview:
    def test_text_file(self, recycle_bin, workspace):
        path = workspace / "notes.txt"
        path.write_text("line 1\nline 2\n")
        record = recycle_bin.capture([path]).captured[0]

        result = recycle_bin.preview(record.id)

        assert result.is_text
        assert result.mime_type == "text/plain"
        assert result.lines == ["line 1", "line 2"]
        assert not result.truncated

    def test_long_text_is_truncated(self, recycle_bin, workspace):
        path = workspace / "long.log"
        path.write_text("".join(f"row {i}\n" for i in range(50)))
        record = recycle_bin.capture([path]).captured[0]

        result = recycle_bin.preview(record.id, max_lines=10)

        assert result.lines == [f"row {i}" for i in range(10)]
        assert result.truncated

    def test_binary_file(self, recycle_bin, workspace):
        path = workspace / "blob.dat"
        path.write_bytes(b"\x00\x01\x02binary")
        record = recycle_bin.capture([path]).captured[0]

        result = recycle_bin.preview(record.id)

        assert not result.is_text
        assert result.lines == []

    def test_directory_lists_entries(self, recycle_bin, workspace):
        tree = workspace / "dir"
        tree.mkdir()
        (tree / "b.txt").write_text("b")
        (tree / "a.txt").write_text("a")
        record = recycle_bin.capture([tree]).captured[0]

        result = recycle_bin.preview(record.id)

        assert result.mime_type == "inode/directory"
        assert result.entries == ["a.txt", "b.txt"]

    def test_symlink_shows_target(self, recycle_bin, workspace):
        link = workspace / "link"
        os.symlink("some/target", link)
        record = recycle_bin.capture([link]).captured[0]

        result = recycle_bin.preview(record.id)

        assert result.entries == ["some/target"]

    def test_preview_does_not_change_bin(self, recycle_bin, workspace):
        path = workspace / "notes.txt"
        path.write_text("x")
        record = recycle_bin.capture([path]).captured[0]

        recycle_bin.preview(record.id)

        assert recycle_bin.store.get(record.id) == record
        assert recycle_bin.payloads.exists(record.id)

    def test_unknown_id(self, recycle_bin):
        with pytest.raises(NotFoundError):
            recycle_bin.preview("1_1")

    def test_name_is_not_an_id(self, recycle_bin, workspace):
        path = workspace / "notes.txt"
        path.write_text("x")
        recycle_bin.capture([path])

        with pytest.raises(NotFoundError):
            recycle_bin.preview("notes.txt")

    def test_missing_payload(self, recycle_bin, workspace):
        path = workspace / "notes.txt"
        path.write_text("x")
        record = recycle_bin.capture([path]).captured[0]
        recycle_bin.payloads.discard(record.id)

        with pytest.raises(PayloadMissingError):
            recycle_bin.preview(record.id)
