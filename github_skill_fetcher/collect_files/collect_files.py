"""Walk a skill folder and download every file beneath it."""

import asyncio
import logging
from collections.abc import Sequence

from ..github import GitHubClient
from ..models import ContentEntry, FileRecord

logger = logging.getLogger(__name__)


async def _download(client: GitHubClient, entry: ContentEntry) -> FileRecord | None:
    if not entry.download_url:
        return None
    content = await client.download_file(entry.download_url)
    if content is None:
        return None
    return FileRecord(path=entry.path, name=entry.name, content=content)


def keep_downloaded(results: Sequence[FileRecord | None]) -> list[FileRecord]:
    """Drop files that could not be downloaded. Missing files are not errors."""
    return [r for r in results if r is not None]


async def collect_files(
    client: GitHubClient, owner: str, repo: str, entries: Sequence[ContentEntry]
) -> list[FileRecord]:
    """Flat list of every downloadable file under `entries`, recursing into subdirectories.

    Files in one directory are downloaded concurrently and all settle before the
    subdirectories are walked, one after another. RateLimitError from a listing
    propagates and aborts the whole collection.
    """
    file_entries = [e for e in entries if e.type == "file"]
    dir_entries = [e for e in entries if e.type == "dir"]

    results = await asyncio.gather(*(_download(client, e) for e in file_entries))
    files = keep_downloaded(results)
    dropped = len(file_entries) - len(files)
    if dropped:
        logger.warning("Skipped %d undownloadable file(s) in %s/%s", dropped, owner, repo)

    for directory in dir_entries:
        if not directory.path:
            continue
        children = await client.list_directory(owner, repo, directory.path)
        if children:
            files.extend(await collect_files(client, owner, repo, children))

    return files
