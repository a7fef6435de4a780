"""Round-robin credential pool for GitHub API calls."""

import threading

from .settings import Settings, get_settings

GITHUB_ACCEPT = "application/vnd.github.v3+json"


class CredentialPool:
    """Hands out GitHub tokens in strict round-robin order.

    Each call to next_headers() advances the cursor by exactly one, so N calls
    spread evenly across the pool. An empty pool yields unauthenticated headers.
    """

    def __init__(self, tokens: list[str] | None = None):
        self.tokens = list(tokens or [])
        self._cursor = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "CredentialPool":
        return cls((settings or get_settings()).token_pool())

    def __len__(self) -> int:
        return len(self.tokens)

    def next_token(self) -> str | None:
        if not self.tokens:
            return None
        with self._lock:
            token = self.tokens[self._cursor % len(self.tokens)]
            self._cursor += 1
        return token

    def next_headers(self) -> dict[str, str]:
        headers = {"Accept": GITHUB_ACCEPT}
        token = self.next_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
