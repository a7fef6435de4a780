"""Report remaining GitHub quota for each credential in the pool."""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone

import requests
from github import Auth, Github, GithubException

from .settings import get_settings


@dataclass
class TokenRateLimit:
    token: str  # masked
    remaining: int | None = None
    limit: int | None = None
    reset_at: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def mask_token(token: str | None) -> str:
    if not token:
        return "(anonymous)"
    return f"...{token[-4:]}"


def _check(token: str | None, base_url: str) -> TokenRateLimit:
    auth = Auth.Token(token) if token else None
    gh = Github(auth=auth, base_url=base_url, retry=None)
    try:
        remaining, limit = gh.rate_limiting
        reset = datetime.fromtimestamp(gh.rate_limiting_resettime, tz=timezone.utc)
    except GithubException as e:
        message = e.data.get("message") if isinstance(e.data, dict) else None
        return TokenRateLimit(token=mask_token(token), error=message or f"GitHub returned {e.status}")
    except requests.RequestException as e:
        return TokenRateLimit(token=mask_token(token), error=f"Could not reach GitHub: {e}")
    finally:
        gh.close()
    return TokenRateLimit(
        token=mask_token(token),
        remaining=remaining,
        limit=limit,
        reset_at=reset.isoformat(timespec="seconds").replace("+00:00", "Z"),
    )


def rate_limit_report(tokens: list[str] | None = None) -> list[TokenRateLimit]:
    """One entry per pooled token, or a single anonymous entry for an empty pool."""
    settings = get_settings()
    pool = settings.token_pool() if tokens is None else tokens
    return [_check(token, settings.github_api_url) for token in (pool or [None])]
