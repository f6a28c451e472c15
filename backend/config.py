"""Centralized configuration — all env vars in one place."""

import os

from services.cache import DEFAULT_TTL_SECONDS

DEFAULT_WORDPRESS_URL = "https://woo.local"


def _int_or_none(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # WordPress backend
        self.wordpress_url: str = (
            os.getenv("NEXT_PUBLIC_WORDPRESS_URL") or os.getenv("WORDPRESS_URL") or DEFAULT_WORDPRESS_URL
        ).rstrip("/")
        self.wordpress_graphql_url: str = os.getenv("WORDPRESS_API_URL") or f"{self.wordpress_url}/graphql"
        self.http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "10"))

        # Response cache
        self.cache_default_ttl: float = float(os.getenv("CACHE_DEFAULT_TTL", str(DEFAULT_TTL_SECONDS)))
        self.cache_max_entries: int | None = _int_or_none(os.getenv("CACHE_MAX_ENTRIES"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of env vars that are unset and silently defaulted."""
        missing = []
        if not (os.getenv("NEXT_PUBLIC_WORDPRESS_URL") or os.getenv("WORDPRESS_URL")):
            missing.append("WORDPRESS_URL")
        return missing


settings = Settings()
