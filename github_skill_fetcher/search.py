"""Keyword search against the skills.sh index."""

import logging

import httpx

from .models import SearchResult, SearchResults
from .settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 500

# skills.sh rejects requests that don't look like a browser
SKILLS_HEADERS = {
    "accept": "*/*",
    "accept-language": "en-US,en;q=0.9",
    "Cookie": "region=us",
    "user-agent": (
        "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/145.0.0.0 Mobile Safari/537.36"
    ),
}


class SkillsSearchError(Exception):
    """skills.sh answered with a non-success status."""


def _to_result(item: dict) -> SearchResult:
    source = item.get("source") or ""
    skill_id = item.get("skillId") or ""
    return SearchResult(
        id=f"{source}/{skill_id}",
        name=item.get("name") or skill_id,
        source=source,
        installs=item.get("installs") or 0,
    )


def parse_search_response(query: str, data) -> SearchResults:
    """Accept either a bare list or {"skills": [...]}."""
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = data.get("skills") or []
    else:
        items = []
    skills = [_to_result(item) for item in items if isinstance(item, dict)]
    return SearchResults(query=query, total=len(skills), skills=skills)


async def search_skills(
    query: str,
    limit: int = DEFAULT_LIMIT,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> SearchResults:
    """Search skills.sh; result IDs are ready for fetch_skill_details."""
    if not 1 <= limit <= MAX_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_LIMIT}, got {limit}")

    settings = get_settings()
    params = {"q": query, "limit": str(limit)}

    if http_client is None:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            resp = await client.get(settings.skills_api_url, params=params, headers=SKILLS_HEADERS)
    else:
        resp = await http_client.get(settings.skills_api_url, params=params, headers=SKILLS_HEADERS)

    if not resp.is_success:
        raise SkillsSearchError(f"skills.sh API returned {resp.status_code}: {resp.text[:500]}")

    results = parse_search_response(query, resp.json())
    logger.debug("skills.sh returned %d results for %r", results.total, query)
    return results
