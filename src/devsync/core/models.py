"""Core data models for devsync."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Article:
    """An article as returned by the dev.to API."""

    id: int
    title: str = ""
    body_markdown: str = ""

    @classmethod
    def from_api(cls, data: dict) -> Article:
        """Build an Article from one element of a /articles/me response."""
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            body_markdown=data.get("body_markdown") or "",
        )


@dataclass
class Document:
    """A local markdown file split into front matter and body."""

    metadata: dict = field(default_factory=dict)
    body: str = ""

    @property
    def title(self) -> str:
        """The stripped title, or "" when it is missing or not a string."""
        value = self.metadata.get("title")
        return value.strip() if isinstance(value, str) else ""

    @property
    def article_id(self) -> int | str | None:
        """The remote id, or None if the file has not been published.

        Falsy values (``0``, ``false``, blank strings) count as unpublished.
        """
        value = self.metadata.get("id")
        if isinstance(value, str):
            value = value.strip()
        return value or None

    @property
    def is_published(self) -> bool:
        return self.article_id is not None


@dataclass
class PullResult:
    """Result of a pull run."""

    pages: int = 0
    fetched: int = 0
    written: list[Path] = field(default_factory=list)
    errors: list[tuple[int, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass
class PushResult:
    """Result of a push run."""

    dry_run: bool = True
    published: list[tuple[Path, int]] = field(default_factory=list)
    planned: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    errors: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors
