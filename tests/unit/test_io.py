"""Unit tests for build output helpers."""

import os
from pathlib import Path

import pytest

from folio.exceptions import IOFailure
from folio.utils.io import atomic_write_text, clean_directory, copy_static_tree


class TestAtomicWriteText:
    """Tests for atomic_write_text."""

    def test_writes_and_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "page.html"

        atomic_write_text(target, "<p>hi</p>")

        assert target.read_text(encoding="utf-8") == "<p>hi</p>"

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "page.html"
        target.write_text("old")

        atomic_write_text(target, "new")

        assert target.read_text() == "new"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        atomic_write_text(tmp_path / "page.html", "x")

        assert sorted(os.listdir(tmp_path)) == ["page.html"]

    def test_preserves_newlines(self, tmp_path: Path) -> None:
        """Test text is written byte-for-byte without newline translation."""
        target = tmp_path / "page.html"

        atomic_write_text(target, "a\nb\r\n")

        assert target.read_bytes() == b"a\nb\r\n"

    def test_unwritable_destination(self, tmp_path: Path) -> None:
        """Test a path blocked by a file raises IOFailure."""
        (tmp_path / "blocker").write_text("file, not dir")

        with pytest.raises(IOFailure, match="Cannot create output file"):
            atomic_write_text(tmp_path / "blocker" / "page.html", "x")


class TestCopyStaticTree:
    """Tests for copy_static_tree."""

    def test_copies_relative_paths(self, tmp_path: Path) -> None:
        static = tmp_path / "static"
        (static / "css").mkdir(parents=True)
        (static / "css" / "style.css").write_text("body {}")
        (static / "cv.pdf").write_bytes(b"%PDF")
        output = tmp_path / "_site"

        copied = copy_static_tree(static, output)

        assert copied == [Path("css/style.css"), Path("cv.pdf")]
        assert (output / "css" / "style.css").read_text() == "body {}"
        assert (output / "cv.pdf").read_bytes() == b"%PDF"

    def test_missing_static_dir(self, tmp_path: Path) -> None:
        assert copy_static_tree(tmp_path / "static", tmp_path / "_site") == []


class TestCleanDirectory:
    """Tests for clean_directory."""

    def test_removes_tree(self, tmp_path: Path) -> None:
        output = tmp_path / "_site"
        (output / "old").mkdir(parents=True)
        (output / "old" / "page.html").write_text("stale")

        clean_directory(output)

        assert not output.exists()

    def test_missing_directory_is_noop(self, tmp_path: Path) -> None:
        clean_directory(tmp_path / "nothing")
