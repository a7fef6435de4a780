"""Async GitHub REST client for tree listings, directory contents and raw downloads."""

import logging
from urllib.parse import quote

import httpx

from .credentials import CredentialPool
from .models import ContentEntry, TreeEntry, TreeListing
from .settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT_MESSAGE = "GitHub rate limit exceeded"


class GitHubError(Exception):
    """Base class for GitHub API failures."""


class RateLimitError(GitHubError):
    """GitHub answered 403; the message comes from the response body when present."""


def _rate_limit_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return DEFAULT_RATE_LIMIT_MESSAGE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return DEFAULT_RATE_LIMIT_MESSAGE


class GitHubClient:
    """Thin async client over the three GitHub endpoints skill retrieval needs.

    Every API call takes its Authorization header from the injected CredentialPool.
    Raw downloads go out without credentials.
    """

    def __init__(
        self,
        credentials: CredentialPool | None = None,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.credentials = credentials if credentials is not None else CredentialPool()
        self.api_url = api_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self.requests = 0  # outbound calls issued, downloads included

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient | None = None) -> "GitHubClient":
        settings = get_settings()
        return cls(
            credentials=CredentialPool.from_settings(settings),
            api_url=settings.github_api_url,
            timeout=settings.request_timeout,
            http_client=http_client,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _api_get(self, endpoint: str, params: dict | None = None) -> httpx.Response:
        url = f"{self.api_url}/{endpoint.lstrip('/')}"
        self.requests += 1
        logger.debug("GET %s", url)
        return await self._client.get(url, params=params, headers=self.credentials.next_headers())

    async def fetch_tree(self, owner: str, repo: str) -> TreeListing:
        """Recursive tree listing of the default branch tip (HEAD).

        Never raises on HTTP status: 403 becomes a rate-limit error message,
        anything else non-2xx a generic status error.
        """
        resp = await self._api_get(f"repos/{owner}/{repo}/git/trees/HEAD", params={"recursive": "1"})

        if resp.status_code == 403:
            return TreeListing(error=_rate_limit_message(resp))
        if not resp.is_success:
            return TreeListing(error=f"GitHub Trees API returned {resp.status_code}")

        data = resp.json()
        tree = (data.get("tree") or []) if isinstance(data, dict) else []
        entries = [
            TreeEntry(path=item.get("path", ""), kind=item.get("type", ""))
            for item in tree
            if isinstance(item, dict)
        ]
        return TreeListing(entries=entries)

    async def list_directory(self, owner: str, repo: str, path: str) -> list[ContentEntry] | None:
        """Immediate children of `path`, or None if the folder is absent or unreadable.

        Raises RateLimitError on 403 so a half-collected skill is never reported as complete.
        """
        # "#" and "?" are legal in repository paths
        resp = await self._api_get(f"repos/{owner}/{repo}/contents/{quote(path, safe='/')}")

        if resp.status_code == 403:
            raise RateLimitError(_rate_limit_message(resp))
        if not resp.is_success:
            return None

        items = resp.json()
        if not isinstance(items, list):
            # A file path returns a single object, not a listing
            return None
        return [ContentEntry.from_api(item) for item in items if isinstance(item, dict)]

    async def download_file(self, url: str) -> str | None:
        """Raw text of a file, or None on any failure."""
        self.requests += 1
        logger.debug("GET %s", url)
        try:
            resp = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("Download failed for %s: %s", url, e)
            return None
        if not resp.is_success:
            logger.debug("Download of %s returned %s", url, resp.status_code)
            return None
        return resp.text
