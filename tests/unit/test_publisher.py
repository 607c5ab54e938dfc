"""Tests for devsync.sync.publisher — dry-run, publish, rename, batch policy."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import frontmatter
import pytest

from devsync.sync.api import ArticleAPI
from devsync.sync.errors import FrontMatterError, MissingTitle, RemoteError
from devsync.sync.pacing import NoDelay
from devsync.sync.publisher import Publisher, published_path, select_files


def _write_md(path: Path, meta: dict | None, body: str = "Body text\n") -> Path:
    """Write a markdown file with optional YAML front matter."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if meta is None:
        path.write_text(body, encoding="utf-8")
        return path
    lines = ["---"] + [f"{k}: {v}" for k, v in meta.items()] + ["---", "", body]
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def _mock_api(ids: list[int] | None = None) -> MagicMock:
    api = MagicMock(spec=ArticleAPI)
    api.create_article.side_effect = ids or [42]
    return api


def _snapshot(directory: Path) -> dict[str, str]:
    return {p.name: p.read_text(encoding="utf-8") for p in sorted(directory.iterdir())}


class TestSelectFiles:
    def test_filters_and_sorts(self):
        files = select_files(["b.md", "notes.txt", "a.md", "dir/c.md", "image.png"])
        assert files == [Path("a.md"), Path("b.md"), Path("dir/c.md")]

    def test_sorted_by_string_as_given(self):
        files = select_files(["drafts/10-b.md", "drafts/2-a.md"])
        assert files == [Path("drafts/10-b.md"), Path("drafts/2-a.md")]

    def test_empty(self):
        assert select_files([]) == []


class TestPublishedPath:
    def test_same_dir(self, tmp_path: Path):
        assert published_path(tmp_path / "post.md", 42) == tmp_path / "post_42.md"

    def test_relative(self):
        assert published_path(Path("drafts/my-post.md"), 7) == Path("drafts/my-post_7.md")


class TestDryRun:
    def test_no_request_no_changes(self, tmp_path: Path):
        _write_md(tmp_path / "a.md", {"title": "First"})
        _write_md(tmp_path / "b.md", {"title": "Second"})
        before = _snapshot(tmp_path)
        api = _mock_api()

        result = Publisher(api, dry_run=True).run([tmp_path / "a.md", tmp_path / "b.md"])

        api.create_article.assert_not_called()
        assert _snapshot(tmp_path) == before
        assert result.planned == [tmp_path / "a.md", tmp_path / "b.md"]
        assert result.published == []

    def test_works_without_api(self, tmp_path: Path):
        _write_md(tmp_path / "a.md", {"title": "First"})
        messages: list[str] = []
        result = Publisher(None, progress=messages.append).run([tmp_path / "a.md"])
        assert result.planned == [tmp_path / "a.md"]
        assert messages == [f'Dry-run: would post "First" from {tmp_path / "a.md"}']

    def test_pacing_not_used(self, tmp_path: Path):
        _write_md(tmp_path / "a.md", {"title": "First"})
        pacing = MagicMock()
        Publisher(None, pacing=pacing).run([tmp_path / "a.md"])
        pacing.wait.assert_not_called()

    def test_api_required_for_publish(self):
        with pytest.raises(ValueError):
            Publisher(None, dry_run=False)


class TestSkipPublished:
    @pytest.mark.parametrize("dry_run", [True, False])
    def test_file_with_id_never_sent(self, tmp_path: Path, dry_run: bool):
        path = _write_md(tmp_path / "done_5.md", {"title": "Done", "id": 5})
        before = _snapshot(tmp_path)
        api = _mock_api()
        pacing = MagicMock()

        result = Publisher(api, dry_run=dry_run, pacing=pacing).run([path])

        api.create_article.assert_not_called()
        pacing.wait.assert_not_called()
        assert result.skipped == [path]
        assert result.success
        assert _snapshot(tmp_path) == before


class TestPublish:
    def test_publish_renames_with_id(self, tmp_path: Path):
        path = _write_md(tmp_path / "post.md", {"title": "My Post", "tags": "python"},
                         body="\n\nBody text\n\n")
        api = _mock_api([42])
        pacing = MagicMock()

        result = Publisher(api, dry_run=False, pacing=pacing).run([path])

        api.create_article.assert_called_once_with("My Post", "Body text")
        new_path = tmp_path / "post_42.md"
        assert not path.exists()
        assert new_path.exists()
        post = frontmatter.load(str(new_path))
        assert post.metadata == {"title": "My Post", "tags": "python", "id": 42}
        assert post.content.strip() == "Body text"
        assert result.published == [(new_path, 42)]
        pacing.wait.assert_called_once()

    def test_publish_file_returns_new_path(self, tmp_path: Path):
        path = _write_md(tmp_path / "post.md", {"title": "T"})
        new_path = Publisher(_mock_api([9]), dry_run=False, pacing=NoDelay()).publish_file(path)
        assert new_path == tmp_path / "post_9.md"

    def test_order_and_pacing_per_file(self, tmp_path: Path):
        b = _write_md(tmp_path / "b.md", {"title": "B"})
        a = _write_md(tmp_path / "a.md", {"title": "A"})
        skipped = _write_md(tmp_path / "c.md", {"title": "C", "id": 3})
        api = _mock_api([1, 2])
        pacing = MagicMock()

        Publisher(api, dry_run=False, pacing=pacing).run([b, skipped, a])

        titles = [c.args[0] for c in api.create_article.call_args_list]
        assert titles == ["A", "B"]
        assert pacing.wait.call_count == 2
        assert (tmp_path / "a_1.md").exists()
        assert (tmp_path / "b_2.md").exists()

    def test_non_md_ignored(self, tmp_path: Path):
        txt = tmp_path / "notes.txt"
        txt.write_text("---\ntitle: Notes\n---\nbody", encoding="utf-8")
        api = _mock_api()
        Publisher(api, dry_run=False, pacing=NoDelay()).run([txt])
        api.create_article.assert_not_called()
        assert txt.exists()

    def test_remote_error_leaves_file(self, tmp_path: Path):
        path = _write_md(tmp_path / "post.md", {"title": "T"})
        before = _snapshot(tmp_path)
        api = MagicMock(spec=ArticleAPI)
        api.create_article.side_effect = RemoteError("Failed to post article: 429", 429)
        pacing = MagicMock()

        with pytest.raises(RemoteError) as exc_info:
            Publisher(api, dry_run=False, pacing=pacing).run([path])

        assert exc_info.value.status_code == 429
        assert _snapshot(tmp_path) == before
        pacing.wait.assert_not_called()


class TestMissingTitle:
    def test_aborts_batch(self, tmp_path: Path):
        bad = _write_md(tmp_path / "a.md", {"tags": "python"})
        good = _write_md(tmp_path / "b.md", {"title": "Good"})
        api = _mock_api()

        with pytest.raises(MissingTitle) as exc_info:
            Publisher(api, dry_run=False, pacing=NoDelay()).run([good, bad])

        assert exc_info.value.path == bad
        api.create_article.assert_not_called()
        assert good.exists()
        assert not (tmp_path / "b_42.md").exists()

    def test_aborts_in_dry_run(self, tmp_path: Path):
        _write_md(tmp_path / "a.md", None, body="# No front matter\n")
        with pytest.raises(MissingTitle):
            Publisher(None).run([tmp_path / "a.md"])

    def test_keep_going_collects(self, tmp_path: Path):
        bad = _write_md(tmp_path / "a.md", {"tags": "python"})
        good = _write_md(tmp_path / "b.md", {"title": "Good"})
        api = _mock_api([42])

        result = Publisher(api, dry_run=False, pacing=NoDelay(), fail_fast=False).run([bad, good])

        assert [p for p, _ in result.errors] == [bad]
        assert result.published == [(tmp_path / "b_42.md", 42)]
        assert bad.exists()

    def test_keep_going_missing_file(self, tmp_path: Path):
        result = Publisher(None, fail_fast=False).run([tmp_path / "gone.md"])
        assert [p for p, _ in result.errors] == [tmp_path / "gone.md"]


class TestUnreadableFiles:
    def test_non_utf8_aborts(self, tmp_path: Path):
        path = tmp_path / "a.md"
        path.write_bytes(b"---\ntitle: caf\xe9\n---\n\xff body\n")
        with pytest.raises(FrontMatterError, match="not valid UTF-8"):
            Publisher(None).run([path])

    def test_non_utf8_keep_going(self, tmp_path: Path):
        bad = tmp_path / "a.md"
        bad.write_bytes(b"\xff\xfe not utf-8")
        good = _write_md(tmp_path / "b.md", {"title": "Good"})

        result = Publisher(None, fail_fast=False).run([bad, good])

        assert [p for p, _ in result.errors] == [bad]
        assert result.planned == [good]


class TestTitleAndIdValues:
    def test_non_string_title_rejected(self, tmp_path: Path):
        path = _write_md(tmp_path / "a.md", {"title": "yes"})
        api = _mock_api()
        with pytest.raises(MissingTitle, match="title must be a string, got bool"):
            Publisher(api, dry_run=False, pacing=NoDelay()).run([path])
        api.create_article.assert_not_called()

    def test_quoted_title_sent_as_is(self, tmp_path: Path):
        path = _write_md(tmp_path / "a.md", {"title": '"yes"'})
        api = _mock_api([5])
        Publisher(api, dry_run=False, pacing=NoDelay()).run([path])
        api.create_article.assert_called_once_with("yes", "Body text")

    def test_zero_id_is_posted(self, tmp_path: Path):
        path = _write_md(tmp_path / "a.md", {"title": "T", "id": 0})
        api = _mock_api([8])
        result = Publisher(api, dry_run=False, pacing=NoDelay()).run([path])
        api.create_article.assert_called_once()
        assert result.published == [(tmp_path / "a_8.md", 8)]
        assert frontmatter.load(str(tmp_path / "a_8.md")).metadata["id"] == 8
