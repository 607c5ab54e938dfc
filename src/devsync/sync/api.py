"""dev.to (Forem) article API client.

Only the two endpoints devsync needs:
  GET  /articles/me?page=N&per_page=M   → list of the user's articles
  POST /articles                         → create a new article

Docs: https://developers.forem.com/api/v0
"""

from __future__ import annotations

import logging

import httpx

from devsync.core.models import Article
from devsync.sync.errors import RemoteError

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dev.to/api"


class ArticleAPI:
    """Authenticated client for the dev.to article endpoints.

    The API key is passed in explicitly; tests hand in a ``client`` built on
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None
        self._request_count = 0

    def __enter__(self) -> ArticleAPI:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def request_count(self) -> int:
        """Number of API requests made."""
        return self._request_count

    def list_my_articles(self, page: int, per_page: int = 100) -> list[Article]:
        """Return one page of the authenticated user's articles.

        An empty list means there are no more pages.
        """
        resp = self._request(
            "GET",
            "/articles/me",
            params={"page": page, "per_page": per_page},
            action=f"fetch page {page}",
        )
        data = self._json(resp, f"Failed to fetch page {page}")
        if not isinstance(data, list):
            raise RemoteError(
                f"Failed to fetch page {page}: expected a JSON array, got {type(data).__name__}"
            )
        try:
            return [Article.from_api(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Failed to fetch page {page}: malformed article ({e!r})") from e

    def create_article(self, title: str, body_markdown: str, published: bool = True) -> int:
        """Create an article and return its server-assigned id."""
        resp = self._request(
            "POST",
            "/articles",
            json={
                "article": {
                    "title": title,
                    "body_markdown": body_markdown,
                    "published": published,
                },
            },
            action="post article",
        )
        data = self._json(resp, "Failed to post article")
        try:
            return int(data["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Failed to post article: response has no id ({data!r})") from e

    def _request(self, method: str, path: str, *, action: str, **kwargs) -> httpx.Response:
        url = f"{self._base_url}{path}"
        self._request_count += 1
        log.debug("%s %s %s", method, url, kwargs.get("params", ""))
        try:
            resp = self._client.request(
                method,
                url,
                headers={"api-key": self._api_key},
                **kwargs,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise RemoteError(
                f"Failed to {action}: {status} {e.response.reason_phrase}",
                status_code=status,
            ) from e
        except httpx.TransportError as e:
            raise RemoteError(f"Failed to {action}: dev.to API unreachable: {e}") from e
        return resp

    @staticmethod
    def _json(resp: httpx.Response, context: str):
        try:
            return resp.json()
        except ValueError as e:
            content_type = resp.headers.get("content-type", "unknown")
            raise RemoteError(
                f"{context}: response is not JSON ({content_type})",
                status_code=resp.status_code,
            ) from e
