"""
Tests for the payload area and filesystem helpers.
"""

import os

import pytest

from recyclebin.core.bin import fsutil
from recyclebin.core.payload.area import PayloadArea
from recyclebin.core.records.models import ItemKind


@pytest.fixture
def payloads(tmp_path):
    return PayloadArea(tmp_path / "files")


class TestFsUtil:
    def test_classify(self, workspace):
        (workspace / "f").write_text("x")
        (workspace / "d").mkdir()
        os.symlink(workspace / "d", workspace / "link")

        assert fsutil.classify(workspace / "f") is ItemKind.FILE
        assert fsutil.classify(workspace / "d") is ItemKind.DIRECTORY
        assert fsutil.classify(workspace / "link") is ItemKind.SYMLINK

    def test_tree_size_counts_files_not_link_targets(self, workspace, tmp_path):
        tree = workspace / "tree"
        (tree / "sub").mkdir(parents=True)
        (tree / "a").write_bytes(b"x" * 10)
        (tree / "sub" / "b").write_bytes(b"y" * 5)
        outside = tmp_path / "big"
        outside.mkdir()
        (outside / "huge").write_bytes(b"z" * 1000)
        os.symlink(outside, tree / "to_big")

        size = fsutil.tree_size(tree)

        assert 15 <= size < 1000
        assert size == 15 + os.lstat(tree / "to_big").st_size

    def test_mode_string(self, workspace):
        path = workspace / "f"
        path.write_text("x")
        os.chmod(path, 0o640)
        assert fsutil.mode_string(os.lstat(path)) == "640"

    def test_owner_round_trip(self, workspace):
        path = workspace / "f"
        path.write_text("x")
        st = os.lstat(path)
        assert fsutil.resolve_owner(fsutil.owner_string(st)) == (st.st_uid, st.st_gid)

    def test_resolve_owner_numeric_and_invalid(self):
        assert fsutil.resolve_owner("1234:5678") == (1234, 5678)
        assert fsutil.resolve_owner("nocolon") is None
        assert fsutil.resolve_owner("no-such-user-xyz:no-such-group-xyz") is None

    def test_is_within(self, tmp_path):
        assert fsutil.is_within(tmp_path / "a" / "b", tmp_path)
        assert fsutil.is_within(tmp_path, tmp_path)
        assert not fsutil.is_within(tmp_path.parent, tmp_path)


class TestPayloadArea:
    def test_store_and_release_file(self, payloads, workspace):
        source = workspace / "a.txt"
        source.write_text("hello")

        payloads.store(source, "1_1", ItemKind.FILE)

        assert not source.exists()
        assert payloads.exists("1_1")
        assert payloads.entries() == ["1_1"]

        payloads.release("1_1", source)
        assert source.read_text() == "hello"
        assert not payloads.exists("1_1")

    def test_store_directory(self, payloads, workspace):
        source = workspace / "dir"
        source.mkdir()
        (source / "b.txt").write_text("b")

        stored = payloads.store(source, "2_1", ItemKind.DIRECTORY)

        assert (stored / "b.txt").read_text() == "b"

    def test_store_dangling_symlink(self, payloads, workspace):
        link = workspace / "dangling"
        os.symlink(workspace / "missing-target", link)

        payloads.store(link, "3_1", ItemKind.SYMLINK)

        assert not os.path.lexists(link)
        assert payloads.exists("3_1")
        assert os.readlink(payloads.path_for("3_1")) == str(workspace / "missing-target")

    def test_release_symlink_keeps_target_text(self, payloads, workspace):
        target = workspace / "target.txt"
        target.write_text("t")
        link = workspace / "link"
        os.symlink("target.txt", link)

        payloads.store(link, "4_1", ItemKind.SYMLINK)
        payloads.release("4_1", link)

        assert os.readlink(link) == "target.txt"
        assert link.read_text() == "t"

    def test_discard(self, payloads, workspace):
        source = workspace / "dir"
        (source / "deep").mkdir(parents=True)
        payloads.store(source, "5_1", ItemKind.DIRECTORY)

        assert payloads.discard("5_1") is True
        assert payloads.discard("5_1") is False

    def test_clear(self, payloads, workspace):
        for name in ("a", "b"):
            (workspace / name).write_text(name)
            payloads.store(workspace / name, f"{name}_1", ItemKind.FILE)

        assert payloads.clear() == 2
        assert payloads.entries() == []

    def test_entries_without_directory(self, tmp_path):
        assert PayloadArea(tmp_path / "absent").entries() == []
