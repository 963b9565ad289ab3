"""
Configuration helpers for the accounts backend.

Routers and services read settings through `get_settings()` instead of
fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    session_ttl_seconds: int
    password_min_length: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", ""),
        session_ttl_seconds=max(60, _int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400)),
        password_min_length=max(1, _int(os.getenv("PASSWORD_MIN_LENGTH", "8"), 8)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
