"""Fetch every file of one or more skills from their GitHub repositories."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from ..collect_files import collect_files
from ..github import GitHubClient
from ..models import MAX_SKILL_IDS, InvalidSkillIdError, SkillDetailResult, SkillReference
from ..resolve_skill_folder import resolve_skill_folder

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], Awaitable[None] | None]


async def fetch_skill_details(client: GitHubClient, composite_id: str) -> SkillDetailResult:
    """Resolve and download one skill. Never raises; failures land in `error`."""
    try:
        ref = SkillReference.parse(composite_id)
    except InvalidSkillIdError as e:
        return SkillDetailResult(id=composite_id, error=str(e))

    try:
        match = await resolve_skill_folder(client, ref)
        if not match.ok:
            logger.warning("Could not resolve %s: %s", composite_id, match.reason)
            return SkillDetailResult(id=composite_id, error=match.reason)

        items = await client.list_directory(ref.repo_owner, ref.repo_name, match.folder_path)
        if items is None:
            return SkillDetailResult(id=composite_id, error="Could not fetch folder contents from GitHub")

        files = await collect_files(client, ref.repo_owner, ref.repo_name, items)
    except Exception as e:
        logger.warning("Fetching %s failed: %s", composite_id, e)
        return SkillDetailResult(id=composite_id, error=str(e) or type(e).__name__)

    return SkillDetailResult(id=composite_id, files=files)


async def fetch_skill_details_batch(
    skill_ids: Sequence[str],
    client: GitHubClient | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[SkillDetailResult]:
    """Fetch all skills concurrently. One result per ID, in input order.

    Reports (completed, total, message) to on_progress once up front and then as
    each skill settles. A failing callback is logged and never affects the results.
    """
    if not 1 <= len(skill_ids) <= MAX_SKILL_IDS:
        raise ValueError(f"Expected 1-{MAX_SKILL_IDS} skill IDs, got {len(skill_ids)}")

    if client is None:
        async with GitHubClient.from_settings() as owned:
            return await fetch_skill_details_batch(skill_ids, owned, on_progress)

    total = len(skill_ids)
    completed = 0

    async def _report(message: str) -> None:
        if on_progress is None:
            return
        try:
            maybe = on_progress(completed, total, message)
            if asyncio.iscoroutine(maybe):
                await maybe
        except Exception:
            # A broken reporter must not drop the batch results
            logger.warning("Progress callback failed", exc_info=True)

    async def _one(skill_id: str) -> SkillDetailResult:
        nonlocal completed
        result = await fetch_skill_details(client, skill_id)
        completed += 1
        await _report(f"Fetched {completed}/{total} skills")
        return result

    await _report("Fetching skill details...")

    return list(await asyncio.gather(*(_one(s) for s in skill_ids)))
