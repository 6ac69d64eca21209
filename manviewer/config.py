"""Configuration utilities for the ManViewer service."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .services.search import MAX_MATCHES

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

DEFAULT_CORS_ORIGIN_REGEX = (
    r"(?:http|https|tauri)://(?:localhost|127\.0\.0\.1|tauri\.localhost)(?::\d{1,5})?"
)


def _load_environment() -> None:
    """Load environment variables from a ``.env`` file if present."""

    explicit_path = os.getenv("MANVIEWER_ENV_FILE")
    candidates = []

    if explicit_path:
        candidates.append(Path(explicit_path))

    candidates.append(PROJECT_ROOT / ".env")

    for candidate in candidates:
        try_path = candidate.expanduser()
        if try_path.exists():
            load_dotenv(try_path, override=False)


_load_environment()


def _split_csv(raw: str | None) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _cors_origin_regex_default() -> str | None:
    """Return the CORS origin regex; a blank value disables it."""

    raw = os.getenv("CORS_ALLOW_ORIGIN_REGEX", DEFAULT_CORS_ORIGIN_REGEX)
    raw = raw.strip()
    return raw or None


class Settings(BaseModel):
    """Application configuration loaded from environment variables."""

    model_config = ConfigDict(validate_default=True)

    host: str = Field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "7650")))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "info"))
    cors_allow_origins: Tuple[str, ...] = Field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ALLOW_ORIGINS"))
    )
    cors_allow_origin_regex: str | None = Field(
        default_factory=_cors_origin_regex_default
    )
    search_match_limit: int = Field(
        default_factory=lambda: int(
            os.getenv("MANVIEWER_SEARCH_MATCH_LIMIT", str(MAX_MATCHES))
        )
    )
    document_cache_size: int = Field(
        default_factory=lambda: int(os.getenv("MANVIEWER_DOCUMENT_CACHE_SIZE", "8"))
    )
    max_document_chars: int = Field(
        default_factory=lambda: int(
            os.getenv("MANVIEWER_MAX_DOCUMENT_CHARS", str(8_000_000))
        )
    )
    lines_page_limit: int = Field(
        default_factory=lambda: int(os.getenv("MANVIEWER_LINES_PAGE_LIMIT", "500"))
    )

    @field_validator("search_match_limit", mode="after")
    @classmethod
    def _clamp_match_limit(cls, value: int) -> int:
        return max(1, min(MAX_MATCHES, value))

    @field_validator("document_cache_size", "lines_page_limit", mode="after")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)

    @field_validator("max_document_chars", mode="after")
    @classmethod
    def _positive_document_limit(cls, value: int) -> int:
        return max(1, value)


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the cached settings so that subsequent calls reload from the environment."""

    get_settings.cache_clear()
