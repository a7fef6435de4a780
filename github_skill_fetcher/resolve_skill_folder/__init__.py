from .fuzzy import Candidate, rank_candidates, score_folder_name
from .resolve_skill_folder import (
    TIERS,
    manifest_folders,
    match_exact_directory,
    match_fuzzy,
    match_single_manifest,
    resolve_from_tree,
    resolve_skill_folder,
)

__all__ = [
    "TIERS",
    "Candidate",
    "manifest_folders",
    "match_exact_directory",
    "match_fuzzy",
    "match_single_manifest",
    "rank_candidates",
    "resolve_from_tree",
    "resolve_skill_folder",
    "score_folder_name",
]
