"""Tests for devsync.core.fileutil."""

from pathlib import Path

from devsync.core.fileutil import atomic_write, ensure_dir


class TestEnsureDir:
    def test_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_existing_ok(self, tmp_path: Path):
        ensure_dir(tmp_path)
        assert tmp_path.is_dir()


class TestAtomicWrite:
    def test_creates_file(self, tmp_path: Path):
        target = tmp_path / "test.md"
        atomic_write(target, "hello world")
        assert target.read_text(encoding="utf-8") == "hello world"

    def test_creates_parent_dirs(self, tmp_path: Path):
        target = tmp_path / "articles" / "2024-05-01_1.md"
        atomic_write(target, "content")
        assert target.read_text(encoding="utf-8") == "content"

    def test_overwrites_existing(self, tmp_path: Path):
        target = tmp_path / "test.md"
        target.write_text("old", encoding="utf-8")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temp_files_left(self, tmp_path: Path):
        atomic_write(tmp_path / "test.md", "content")
        assert [p.name for p in tmp_path.iterdir()] == ["test.md"]

    def test_unicode(self, tmp_path: Path):
        target = tmp_path / "test.md"
        atomic_write(target, "記事のタイトル")
        assert target.read_text(encoding="utf-8") == "記事のタイトル"
