"""
Tests for moving items into the recycle bin.
"""

import os
from datetime import datetime

import pytest

from recyclebin.core.bin import fsutil
from recyclebin.core.bin.errors import (
    ForbiddenError,
    InsufficientSpaceError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RelocationError,
    StoreUnwritableError,
)
from recyclebin.core.config.models import BinConfig
from recyclebin.core.ids.generator import IdGenerator
from recyclebin.core.lifecycle.capture import CaptureService
from recyclebin.core.records.models import ItemKind
from recyclebin.core.recycle_bin import RecycleBin

requires_non_root = pytest.mark.skipif(
    os.geteuid() == 0, reason="permission checks do not apply to root"
)


def _bin_with_limit(bin_root, max_size_mb):
    recycle_bin = RecycleBin(BinConfig(root=bin_root, max_size_mb=max_size_mb))
    recycle_bin.initialize()
    return recycle_bin


class TestCaptureFile:
    def test_file_is_moved_and_recorded(self, recycle_bin, workspace):
        path = workspace / "a.txt"
        path.write_bytes(b"0123456789")
        os.chmod(path, 0o640)

        report = recycle_bin.capture([path])

        assert report.ok
        assert not path.exists()
        [record] = recycle_bin.store.list_records()
        assert record == report.captured[0]
        assert record.original_name == "a.txt"
        assert record.original_path == str(path)
        assert record.size == 10
        assert record.kind is ItemKind.FILE
        assert record.mode == "640"
        assert ":" in record.owner
        assert record.deleted_at is not None
        assert recycle_bin.payloads.path_for(record.id).read_bytes() == b"0123456789"

    def test_relative_path_is_made_absolute(self, recycle_bin, workspace, monkeypatch):
        (workspace / "rel.txt").write_text("r")
        monkeypatch.chdir(workspace)

        report = recycle_bin.capture(["rel.txt"])

        assert report.captured[0].original_path == str(workspace / "rel.txt")

    def test_deletion_date_uses_clock(self, recycle_bin, workspace):
        path = workspace / "a.txt"
        path.write_text("a")
        service = CaptureService(
            recycle_bin.config,
            recycle_bin.store,
            recycle_bin.payloads,
            IdGenerator(),
            now=lambda: datetime(2024, 2, 29, 23, 59, 1),
        )

        record = service.capture_one(path)

        assert record.deletion_date == "2024-02-29 23:59:01"

    def test_ids_are_unique_across_batch(self, recycle_bin, workspace):
        paths = []
        for i in range(5):
            path = workspace / f"f{i}.txt"
            path.write_text(str(i))
            paths.append(path)

        report = recycle_bin.capture(paths)

        ids = [r.id for r in report.captured]
        assert len(set(ids)) == 5
        assert sorted(recycle_bin.payloads.entries()) == sorted(ids)


class TestCaptureOtherKinds:
    def test_directory_size_is_sum_of_contents(self, recycle_bin, workspace):
        tree = workspace / "dir"
        (tree / "nested").mkdir(parents=True)
        (tree / "b.txt").write_bytes(b"12345")
        (tree / "nested" / "c.txt").write_bytes(b"123")

        record = recycle_bin.capture([tree]).captured[0]

        assert record.kind is ItemKind.DIRECTORY
        assert record.size == 8
        assert not tree.exists()
        stored = recycle_bin.payloads.path_for(record.id)
        assert (stored / "nested" / "c.txt").read_bytes() == b"123"

    def test_symlink_is_captured_as_link(self, recycle_bin, workspace):
        target = workspace / "target.txt"
        target.write_text("keep me")
        link = workspace / "link"
        os.symlink(target, link)

        record = recycle_bin.capture([link]).captured[0]

        assert record.kind is ItemKind.SYMLINK
        assert record.size == os.lstat(recycle_bin.payloads.path_for(record.id)).st_size
        assert not os.path.lexists(link)
        assert target.read_text() == "keep me"

    def test_dangling_symlink(self, recycle_bin, workspace):
        link = workspace / "dangling"
        os.symlink(workspace / "nowhere", link)

        report = recycle_bin.capture([link])

        assert report.ok
        assert report.captured[0].kind is ItemKind.SYMLINK


class TestCaptureFailures:
    def test_no_paths(self, recycle_bin):
        with pytest.raises(NotFoundError, match="No file or directory specified"):
            recycle_bin.capture([])

    def test_missing_path(self, recycle_bin, workspace):
        report = recycle_bin.capture([workspace / "missing.txt"])

        assert not report.ok
        assert isinstance(report.failures[0].error, NotFoundError)
        assert recycle_bin.store.is_empty()

    def test_partial_batch_continues(self, recycle_bin, workspace):
        good = workspace / "good.txt"
        good.write_text("g")

        report = recycle_bin.capture([workspace / "missing.txt", good])

        assert report.ok
        assert [r.original_name for r in report.captured] == ["good.txt"]
        assert len(report.failures) == 1

    def test_bin_itself_is_forbidden(self, recycle_bin):
        with pytest.raises(ForbiddenError):
            CaptureService(
                recycle_bin.config, recycle_bin.store, recycle_bin.payloads, IdGenerator()
            ).capture_one(recycle_bin.layout.root)

    def test_item_inside_bin_is_forbidden(self, recycle_bin):
        report = recycle_bin.capture([recycle_bin.layout.metadata_file])

        assert isinstance(report.failures[0].error, ForbiddenError)
        assert recycle_bin.layout.metadata_file.exists()

    def test_directory_containing_bin_is_forbidden(self, workspace):
        recycle_bin = _bin_with_limit(workspace / "outer" / "bin", 1024)

        report = recycle_bin.capture([workspace / "outer"])

        assert isinstance(report.failures[0].error, ForbiddenError)
        assert recycle_bin.layout.root.exists()

    def test_quota_exceeded_leaves_file_untouched(self, bin_root, workspace):
        recycle_bin = _bin_with_limit(bin_root, 1)
        path = workspace / "big.bin"
        path.write_bytes(b"x" * (1024 * 1024 + 1))

        report = recycle_bin.capture([path])

        error = report.failures[0].error
        assert isinstance(error, QuotaExceededError)
        assert error.size == 1024 * 1024 + 1
        assert path.stat().st_size == 1024 * 1024 + 1
        assert recycle_bin.store.is_empty()
        assert recycle_bin.payloads.entries() == []

    def test_quota_counts_items_already_in_bin(self, bin_root, workspace):
        recycle_bin = _bin_with_limit(bin_root, 1)
        first = workspace / "first.bin"
        first.write_bytes(b"x" * 600 * 1024)
        second = workspace / "second.bin"
        second.write_bytes(b"y" * 600 * 1024)

        report = recycle_bin.capture([first, second])

        assert [r.original_name for r in report.captured] == ["first.bin"]
        assert isinstance(report.failures[0].error, QuotaExceededError)
        assert second.exists()

    def test_zero_quota_still_accepts_empty_files(self, bin_root, workspace):
        recycle_bin = _bin_with_limit(bin_root, 0)
        path = workspace / "empty"
        path.touch()

        assert recycle_bin.capture([path]).ok

    @requires_non_root
    def test_read_only_parent_is_denied(self, recycle_bin, workspace):
        locked_dir = workspace / "locked"
        locked_dir.mkdir()
        path = locked_dir / "a.txt"
        path.write_text("a")
        os.chmod(locked_dir, 0o500)
        try:
            report = recycle_bin.capture([path])
        finally:
            os.chmod(locked_dir, 0o700)

        assert isinstance(report.failures[0].error, PermissionDeniedError)
        assert path.exists()

    @requires_non_root
    def test_unreadable_file_is_denied(self, recycle_bin, workspace):
        path = workspace / "secret"
        path.write_text("s")
        os.chmod(path, 0o200)

        report = recycle_bin.capture([path])

        assert isinstance(report.failures[0].error, PermissionDeniedError)
        assert path.exists()

    def test_insufficient_space_leaves_file_untouched(self, recycle_bin, workspace, monkeypatch):
        path = workspace / "a.txt"
        path.write_bytes(b"0123456789")
        monkeypatch.setattr(fsutil, "free_bytes", lambda _path: 4)

        report = recycle_bin.capture([path])

        error = report.failures[0].error
        assert isinstance(error, InsufficientSpaceError)
        assert path.read_bytes() == b"0123456789"
        assert recycle_bin.store.is_empty()
        assert recycle_bin.payloads.entries() == []

    def test_store_failure_skips_item_and_batch_continues(
        self, recycle_bin, workspace, monkeypatch
    ):
        first = workspace / "first.txt"
        first.write_text("1")
        second = workspace / "second.txt"
        second.write_text("2")
        append = recycle_bin.store.append
        calls = []

        def _append(record):
            calls.append(record.id)
            if len(calls) == 1:
                raise StoreUnwritableError("Cannot write metadata.db: read-only")
            append(record)

        monkeypatch.setattr(recycle_bin.store, "append", _append)

        report = recycle_bin.capture([first, second])

        assert isinstance(report.failures[0].error, StoreUnwritableError)
        assert report.failures[0].path == str(first)
        assert first.exists()
        assert [r.original_name for r in report.captured] == ["second.txt"]
        assert not second.exists()
        assert [r.original_name for r in recycle_bin.store.list_records()] == ["second.txt"]


class TestRelocationFailure:
    @pytest.fixture
    def failed(self, recycle_bin, workspace, monkeypatch):
        path = workspace / "a.txt"
        path.write_text("a")

        def _store(source, record_id, kind):
            raise OSError(18, "Invalid cross-device link")

        monkeypatch.setattr(recycle_bin.payloads, "store", _store)
        report = recycle_bin.capture([path])
        return path, report

    def test_error_and_orphaned_record(self, recycle_bin, failed):
        path, report = failed

        assert not report.ok
        error = report.failures[0].error
        assert isinstance(error, RelocationError)
        assert "left orphaned" in str(error)
        assert path.read_text() == "a"
        [record] = recycle_bin.store.list_records()
        assert record.original_path == str(path)
        assert not recycle_bin.payloads.exists(record.id)

    def test_purge_drops_orphaned_record(self, recycle_bin, failed):
        [record] = recycle_bin.store.list_records()

        assert recycle_bin.purger.purge_corrupted() == [record]
        assert recycle_bin.store.is_empty()
