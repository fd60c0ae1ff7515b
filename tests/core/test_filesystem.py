"""
Unit tests for filesystem helpers.
"""

import os

import pytest

from xcsetup.core.filesystem import (
    FilesystemError,
    ensure_directory,
    make_executable,
    recursive_copy,
    safe_rmtree,
)


class TestEnsureDirectory:
    def test_creates_nested(self, tmp_path):
        target = tmp_path / "opt" / "my compilers"

        assert ensure_directory(target) == target
        assert target.is_dir()

    def test_idempotent(self, tmp_path):
        ensure_directory(tmp_path)
        assert tmp_path.is_dir()


class TestMakeExecutable:
    def test_sets_execute_bits(self, tmp_path):
        installer = tmp_path / "installer.run"
        installer.write_text("#!/bin/sh\n")
        installer.chmod(0o644)

        make_executable(installer)

        assert os.access(installer, os.X_OK)
        assert installer.stat().st_mode & 0o777 == 0o755

    def test_missing_file(self, tmp_path):
        with pytest.raises(FilesystemError, match="Not a file"):
            make_executable(tmp_path / "missing.run")


class TestSafeRmtree:
    def test_removes_tree(self, tmp_path):
        target = tmp_path / "a" / "b"
        target.mkdir(parents=True)

        safe_rmtree(tmp_path / "a", require_prefix=tmp_path)

        assert not (tmp_path / "a").exists()

    def test_missing_is_ignored(self, tmp_path):
        safe_rmtree(tmp_path / "missing")

    def test_refuses_outside_prefix(self, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()

        with pytest.raises(FilesystemError, match="Refusing to remove"):
            safe_rmtree(outside, require_prefix=tmp_path / "cache")

        assert outside.exists()

    def test_refuses_prefix_itself(self, tmp_path):
        with pytest.raises(FilesystemError):
            safe_rmtree(tmp_path, require_prefix=tmp_path)


class TestRecursiveCopy:
    def test_copies_files(self, tmp_path):
        source = tmp_path / "src"
        (source / "bin").mkdir(parents=True)
        (source / "bin" / "xc16-gcc").write_text("binary")
        (source / "empty").mkdir()

        copied = []
        recursive_copy(source, tmp_path / "dst", progress_callback=copied.append)

        assert (tmp_path / "dst" / "bin" / "xc16-gcc").read_text() == "binary"
        assert (tmp_path / "dst" / "empty").is_dir()
        assert len(copied) == 3

    def test_missing_source(self, tmp_path):
        with pytest.raises(FilesystemError, match="Source does not exist"):
            recursive_copy(tmp_path / "missing", tmp_path / "dst")

    def test_source_is_file(self, tmp_path):
        source = tmp_path / "file.txt"
        source.write_text("x")

        with pytest.raises(FilesystemError, match="not a directory"):
            recursive_copy(source, tmp_path / "dst")
