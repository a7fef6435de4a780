"""Fetch skill folders from arbitrary GitHub repositories.

Resolves `owner/repo/skillId` to the directory holding the skill, whatever the
repository layout, then downloads every file beneath it.
"""

from .cli import main
from .credentials import CredentialPool
from .fetch_skill_details import fetch_skill_details, fetch_skill_details_batch
from .github import GitHubClient, GitHubError, RateLimitError
from .models import FileRecord, FolderMatch, SkillDetailResult, SkillReference
from .search import search_skills

__all__ = [
    "main",
    "CredentialPool",
    "FileRecord",
    "FolderMatch",
    "GitHubClient",
    "GitHubError",
    "RateLimitError",
    "SkillDetailResult",
    "SkillReference",
    "fetch_skill_details",
    "fetch_skill_details_batch",
    "search_skills",
]

if __name__ == "__main__":
    main()
