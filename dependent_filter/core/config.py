"""
Application configuration — Pydantic Settings.

Loads from .env with strict validation. Single source of truth
for all environment-dependent values.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────
    APP_NAME: str = "DependentFilter"
    DEBUG: bool = False

    # ── Flask ────────────────────────────────────────────────────
    FLASK_SECRET_KEY: str = ""
    FLASK_PORT: int = 5000

    # ── FastAPI ──────────────────────────────────────────────────
    API_PORT: int = 8000
    API_BASE_URL: str = "http://127.0.0.1:8000"
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5000",
        "http://127.0.0.1:5000",
    ]

    # ── Database ─────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./dependent_filter.db"

    # ── Options resolution ───────────────────────────────────────
    # Default cap for dependent filter option lists (0 = unbounded).
    OPTIONS_MAX_RESULTS: int = 1000

    # ── Outbound HTTP ────────────────────────────────────────────
    HTTP_TIMEOUT: float = 10.0

    # ── Logging ──────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # ── URL Builders ─────────────────────────────────────────────

    @property
    def options_endpoint_url(self) -> str:
        """Absolute URL of the dependent filter options endpoint."""
        return f"{self.API_BASE_URL}{self.API_PREFIX}/dependent-filter-options"


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()
