"""Locate the directory holding a skill inside an arbitrary repository layout.

Resolution is an ordered chain of tiers. Each tier looks at the repository tree
and either returns a FolderMatch (found or failed), which ends resolution, or
None to hand over to the next tier:

1. exact directory name match at any depth (shortest path wins)
2. SKILL.md discovery; fails if the repository has no manifest at all
3. single-skill shortcut when all manifests share one parent directory
4. fuzzy token-overlap scoring across the manifest folders
"""

import logging
from collections.abc import Callable, Sequence

from ..github import GitHubClient
from ..models import FUZZY_MATCH_THRESHOLD, SKILL_MANIFEST, FolderMatch, SkillReference, TreeEntry
from .fuzzy import rank_candidates

logger = logging.getLogger(__name__)

Tier = Callable[[Sequence[TreeEntry], str], FolderMatch | None]


def match_exact_directory(tree: Sequence[TreeEntry], skill_id: str) -> FolderMatch | None:
    suffix = f"/{skill_id}"
    candidates = [
        entry.path
        for entry in tree
        if entry.is_dir and (entry.path == skill_id or entry.path.endswith(suffix))
    ]
    if not candidates:
        return None
    # min() keeps the first of equally short paths
    return FolderMatch.found(min(candidates, key=len))


def manifest_folders(tree: Sequence[TreeEntry]) -> list[str]:
    """Distinct parent directories of SKILL.md files, in tree order. "" is the repository root."""
    folders: list[str] = []
    for entry in tree:
        if entry.kind != "blob":
            continue
        parent, _, name = entry.path.rpartition("/")
        if name.lower() == SKILL_MANIFEST and parent not in folders:
            folders.append(parent)
    return folders


def match_single_manifest(tree: Sequence[TreeEntry], skill_id: str) -> FolderMatch | None:
    folders = manifest_folders(tree)
    if not folders:
        return FolderMatch.failed("No SKILL.md files found in repository")
    if len(folders) == 1:
        return FolderMatch.found(folders[0])
    return None


def match_fuzzy(tree: Sequence[TreeEntry], skill_id: str) -> FolderMatch | None:
    candidates = rank_candidates(manifest_folders(tree), skill_id)
    if not candidates:
        return None
    best = candidates[0]
    if best.score >= FUZZY_MATCH_THRESHOLD:
        return FolderMatch.found(best.folder_path)
    return FolderMatch.failed(
        f"No matching skill folder found (best match: {best.folder_name} at {best.percent}%)"
    )


TIERS: tuple[Tier, ...] = (match_exact_directory, match_single_manifest, match_fuzzy)


def resolve_from_tree(
    tree: Sequence[TreeEntry], skill_id: str, tiers: Sequence[Tier] = TIERS
) -> FolderMatch:
    """Run the tiers in order and return the first decisive match."""
    for tier in tiers:
        match = tier(tree, skill_id)
        if match is not None:
            logger.debug("%s decided %r: %s", getattr(tier, "__name__", tier), skill_id, match)
            return match
    return FolderMatch.failed("Skill folder not found in repository")


async def resolve_skill_folder(client: GitHubClient, ref: SkillReference) -> FolderMatch:
    """Fetch the repository tree once and resolve ref.skill_id against it."""
    listing = await client.fetch_tree(ref.repo_owner, ref.repo_name)
    if listing.error:
        return FolderMatch.failed(listing.error)
    return resolve_from_tree(listing.entries, ref.skill_id)
