"""Error taxonomy for pull/push runs.

Every error is fatal to the current run unless the caller asked to keep
going; the CLI reports the message and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path


class DevSyncError(Exception):
    """Base error for devsync operations."""


class AuthConfigError(DevSyncError):
    """No API key available."""


class RemoteError(DevSyncError):
    """The dev.to API returned a non-2xx response or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingDateMarker(DevSyncError):
    """A fetched article body has no ``###### YYYY-MM-DD`` line."""

    def __init__(self, article_id: int) -> None:
        super().__init__(f"Article {article_id} has no '###### YYYY-MM-DD' date line")
        self.article_id = article_id


class MissingTitle(DevSyncError):
    """A local file has no ``title`` in its front matter."""

    def __init__(self, path: Path, reason: str = "front matter has no title") -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class FrontMatterError(DevSyncError):
    """A local file's front matter could not be parsed."""
