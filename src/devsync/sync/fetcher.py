"""Fetcher — download every article of the authenticated user to disk.

Each article lands in ``<output_dir>/<date>_<id>.md`` where ``date`` is taken
from the first ``###### YYYY-MM-DD`` line of its body.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from devsync.core.document import FrontMatterCodec, YamlFrontMatterCodec, dump_document
from devsync.core.models import Article, PullResult
from devsync.sync.api import ArticleAPI
from devsync.sync.errors import MissingDateMarker

log = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = Path("articles")
DEFAULT_PER_PAGE = 100

# "###### 2024-05-01" at the start of a line
_DATE_MARKER_RE = re.compile(r"^###### (\d{4}-\d{2}-\d{2})")


def extract_date(article: Article) -> str:
    """Return the YYYY-MM-DD date of the first date-marker line in the body.

    Raises:
        MissingDateMarker: No line of the body carries the marker.
    """
    for line in article.body_markdown.splitlines():
        match = _DATE_MARKER_RE.match(line)
        if match:
            return match.group(1)
    raise MissingDateMarker(article.id)


class Fetcher:
    """Page through /articles/me and write each article to a dated file."""

    def __init__(
        self,
        api: ArticleAPI,
        output_dir: Path = DEFAULT_OUTPUT_DIR,
        per_page: int = DEFAULT_PER_PAGE,
        fail_fast: bool = True,
        codec: FrontMatterCodec | None = None,
        progress: Callable[[str], None] | None = None,
    ) -> None:
        if per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {per_page}")
        self.api = api
        self.output_dir = Path(output_dir)
        self.per_page = per_page
        self.fail_fast = fail_fast
        self._codec = codec or YamlFrontMatterCodec()
        self._progress = progress or log.info

    def fetch_all(self, result: PullResult | None = None) -> list[Article]:
        """Request pages 1, 2, ... until one comes back empty.

        Articles keep the order the server returned them in.
        """
        articles: list[Article] = []
        page = 1
        while True:
            batch = self.api.list_my_articles(page, per_page=self.per_page)
            if not batch:
                break
            articles.extend(batch)
            if result is not None:
                result.pages += 1
            self._progress(f"Fetched page {page} ({len(batch)} articles)")
            page += 1
        log.debug("Fetched %d articles in %d pages", len(articles), page - 1)
        return articles

    def article_path(self, article: Article, date: str) -> Path:
        return self.output_dir / f"{date}_{article.id}.md"

    def write_article(self, article: Article) -> Path:
        """Write one article with ``title`` and ``id`` front matter.

        An existing file at the same path is overwritten.
        """
        date = extract_date(article)
        path = self.article_path(article, date)
        dump_document(
            path,
            {"title": article.title, "id": article.id},
            article.body_markdown,
            self._codec,
        )
        return path

    def run(self) -> PullResult:
        """Fetch everything and write it out.

        With ``fail_fast`` the first article without a date line aborts the
        run; otherwise the failure is recorded and the next article is written.
        """
        result = PullResult()
        articles = self.fetch_all(result)
        result.fetched = len(articles)

        for article in articles:
            try:
                path = self.write_article(article)
            except MissingDateMarker as e:
                if self.fail_fast:
                    raise
                log.warning("Skipping article %s: %s", article.id, e)
                result.errors.append((article.id, str(e)))
                continue
            result.written.append(path)
            self._progress(f"Saved {path}")

        return result
