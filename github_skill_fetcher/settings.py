"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for skill retrieval."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_tokens: str = ""
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    skills_api_url: str = "https://skills.sh/api/search"
    request_timeout: float = 30.0

    def token_pool(self) -> list[str]:
        """Ordered credential pool.

        GITHUB_TOKENS (comma-separated) wins; GITHUB_TOKEN is only used when it is empty.
        """
        tokens = [t.strip() for t in self.github_tokens.split(",") if t.strip()]
        if tokens:
            return tokens
        single = (self.github_token or "").strip()
        return [single] if single else []


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
