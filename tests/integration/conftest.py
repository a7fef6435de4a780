"""Integration fixtures: a fake GitHub served through httpx.MockTransport."""

from urllib.parse import quote

import httpx
import pytest

from github_skill_fetcher.credentials import CredentialPool
from github_skill_fetcher.github import GitHubClient

RAW_HOST = "raw.githubusercontent.com"


class FakeGitHub:
    """In-memory repositories answering the trees, contents and raw download endpoints.

    repos: {"owner/repo": {file path: content}}. A content of None publishes the
    file without a download_url. Paths in `broken` list with a URL that 500s.
    """

    def __init__(self, repos, broken=(), rate_limited=(), tree_status=None):
        self.repos = repos
        self.broken = set(broken)
        self.rate_limited = set(rate_limited)  # "owner/repo:dir" listings that 403
        self.tree_status = tree_status or {}  # "owner/repo" -> status
        self.requests: list[httpx.Request] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, tokens=("t1",)) -> GitHubClient:
        http = httpx.AsyncClient(transport=self.transport())
        return GitHubClient(credentials=CredentialPool(list(tokens)), http_client=http)

    def api_requests(self, kind: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host != RAW_HOST and f"/{kind}" in r.url.path]

    @staticmethod
    def _dirs(files) -> set[str]:
        dirs = set()
        for path in files:
            parts = path.split("/")[:-1]
            for i in range(1, len(parts) + 1):
                dirs.add("/".join(parts[:i]))
        return dirs

    def _tree(self, files):
        entries = [{"path": d, "type": "tree"} for d in self._dirs(files)]
        entries += [{"path": f, "type": "blob"} for f in files]
        return {"sha": "HEAD", "tree": sorted(entries, key=lambda e: e["path"]), "truncated": False}

    def _listing(self, source, files, folder):
        prefix = f"{folder}/" if folder else ""
        children = []
        for d in sorted(self._dirs(files)):
            if d.startswith(prefix) and "/" not in d[len(prefix):]:
                children.append({"type": "dir", "path": d, "name": d.rsplit("/", 1)[-1], "download_url": None})
        for f in sorted(files):
            if f.startswith(prefix) and "/" not in f[len(prefix):]:
                url = None if files[f] is None else f"https://{RAW_HOST}/{source}/HEAD/{quote(f)}"
                children.append({"type": "file", "path": f, "name": f.rsplit("/", 1)[-1], "download_url": url})
        return children

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.url.host == RAW_HOST:
            owner, repo, _ref, file_path = path.lstrip("/").split("/", 3)
            if file_path in self.broken:
                return httpx.Response(500)
            content = self.repos.get(f"{owner}/{repo}", {}).get(file_path)
            if content is None:
                return httpx.Response(404, text="404: Not Found")
            return httpx.Response(200, text=content)

        _, _, owner, repo, rest = path.split("/", 4)
        source = f"{owner}/{repo}"
        files = self.repos.get(source)
        if rest == "git/trees/HEAD":
            status = self.tree_status.get(source)
            if status == 403:
                return httpx.Response(403, json={"message": "API rate limit exceeded for 127.0.0.1."})
            if status or files is None:
                return httpx.Response(status or 404, json={"message": "Not Found"})
            return httpx.Response(200, json=self._tree(files))

        if rest.startswith("contents"):
            folder = rest[len("contents"):].strip("/")
            if f"{source}:{folder}" in self.rate_limited:
                return httpx.Response(403, json={"message": "API rate limit exceeded for 127.0.0.1."})
            if files is None or (folder and folder not in self._dirs(files)):
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json=self._listing(source, files, folder))

        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def fake_github():
    def make(repos, **kwargs):
        return FakeGitHub(repos, **kwargs)

    return make
