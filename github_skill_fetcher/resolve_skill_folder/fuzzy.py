"""Token-overlap scoring used to pick between several skill folders."""

import math
from dataclasses import dataclass

from ..models import SUBSTRING_BONUS


@dataclass(frozen=True)
class Candidate:
    folder_path: str
    folder_name: str
    score: float

    @property
    def percent(self) -> int:
        # Half-up rounding, not banker's
        return math.floor(self.score * 100 + 0.5)


def _tokens(value: str) -> set[str]:
    return {t for t in value.split("-") if t}


def score_folder_name(folder_name: str, skill_id: str) -> float:
    """|shared tokens| / max(token counts), plus SUBSTRING_BONUS (capped at 1.0) on containment."""
    folder_tokens = _tokens(folder_name)
    skill_tokens = _tokens(skill_id)
    denominator = max(len(folder_tokens), len(skill_tokens))
    score = len(folder_tokens & skill_tokens) / denominator if denominator else 0.0

    # An empty name (repository root) would trivially be a substring of anything
    if folder_name and (folder_name in skill_id or skill_id in folder_name):
        score = min(score + SUBSTRING_BONUS, 1.0)
    return score


def rank_candidates(folder_paths: list[str], skill_id: str) -> list[Candidate]:
    """Score each folder by its final segment, best first. Ties keep input order."""
    candidates = []
    for folder_path in folder_paths:
        folder_name = folder_path.rsplit("/", 1)[-1]
        candidates.append(Candidate(folder_path, folder_name, score_folder_name(folder_name, skill_id)))
    return sorted(candidates, key=lambda c: c.score, reverse=True)
