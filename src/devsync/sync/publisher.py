"""Publisher — post local markdown files that have no ``id`` yet.

After a successful post the file is rewritten with the new ``id`` in its
front matter under ``<basename>_<id><ext>`` and the original is removed.
Dry-run (the default) only reports what would be posted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from devsync.core.document import (
    FrontMatterCodec,
    YamlFrontMatterCodec,
    dump_document,
    load_document,
)
from devsync.core.models import PushResult
from devsync.sync.api import ArticleAPI
from devsync.sync.errors import DevSyncError, MissingTitle
from devsync.sync.pacing import FixedDelay, Pacing

log = logging.getLogger(__name__)


def select_files(args: Iterable[str | Path]) -> list[Path]:
    """Keep only ``.md`` arguments, sorted by the path string as given."""
    names = sorted(str(a) for a in args if str(a).endswith(".md"))
    return [Path(name) for name in names]


def published_path(path: Path, article_id: int) -> Path:
    """``drafts/post.md`` + 42 → ``drafts/post_42.md``."""
    return path.with_name(f"{path.stem}_{article_id}{path.suffix}")


class Publisher:
    """Create dev.to articles from local files, one at a time."""

    def __init__(
        self,
        api: ArticleAPI | None = None,
        dry_run: bool = True,
        pacing: Pacing | None = None,
        fail_fast: bool = True,
        codec: FrontMatterCodec | None = None,
        progress: Callable[[str], None] | None = None,
    ) -> None:
        if api is None and not dry_run:
            raise ValueError("An ArticleAPI is required unless dry_run is set")
        self.api = api
        self.dry_run = dry_run
        self.pacing = pacing or FixedDelay()
        self.fail_fast = fail_fast
        self._codec = codec or YamlFrontMatterCodec()
        self._progress = progress or log.info

    def publish_file(self, path: Path, result: PushResult | None = None) -> Path | None:
        """Publish a single file.

        Returns:
            The renamed file, or None when the file was skipped or in dry-run.

        Raises:
            MissingTitle: Front matter has no title.
            RemoteError: The create request failed.
        """
        result = result if result is not None else PushResult(dry_run=self.dry_run)
        doc = load_document(path, self._codec)

        if doc.is_published:
            self._progress(f"Skip (already has id): {path}")
            result.skipped.append(path)
            return None

        raw_title = doc.metadata.get("title")
        if raw_title is not None and not isinstance(raw_title, str):
            raise MissingTitle(
                path,
                f"title must be a string, got {type(raw_title).__name__} (quote it in the front matter)",
            )
        title = doc.title
        if not title:
            raise MissingTitle(path)

        if self.dry_run:
            self._progress(f'Dry-run: would post "{title}" from {path}')
            result.planned.append(path)
            return None

        body = doc.body.strip()
        self._progress(f"Posting article: {title}")
        new_id = self.api.create_article(title, body)
        self._progress(f"Posted with id: {new_id}")

        metadata = dict(doc.metadata)
        metadata["id"] = new_id
        new_path = published_path(path, new_id)
        dump_document(new_path, metadata, body, self._codec)
        path.unlink()
        self._progress(f"Saved as {new_path}")
        result.published.append((new_path, new_id))

        self.pacing.wait()
        return new_path

    def run(self, paths: Iterable[str | Path]) -> PushResult:
        """Publish every ``.md`` path in lexicographic order.

        With ``fail_fast`` the first error aborts the batch; otherwise it is
        recorded and the next file is processed.
        """
        result = PushResult(dry_run=self.dry_run)
        for path in select_files(paths):
            try:
                self.publish_file(path, result)
            except (DevSyncError, OSError) as e:
                if self.fail_fast:
                    raise
                log.warning("Failed to publish %s: %s", path, e)
                result.errors.append((path, str(e)))
        return result
