"""
Runtime configuration for the Bingo OG service.
All values are read from environment variables once, at import time.
"""
import os
from pathlib import Path
from typing import List, Optional


def env_flag(name: str, *, default: bool = False) -> bool:
    """
    Return a boolean flag from an environment variable.

    ``1/true/yes/on`` are truthy, ``0/false/no/off`` are falsy; unset or
    unrecognised values fall back to ``default``.
    """
    value = os.getenv(name)
    if value is None:
        return default

    normalised = value.strip().lower()
    if normalised in {"1", "true", "yes", "on"}:
        return True
    if normalised in {"0", "false", "no", "off"}:
        return False
    return default


def env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _split_csv(value: str) -> List[str]:
    return [item.strip().rstrip("/") for item in value.split(",") if item.strip()]


class Settings:
    """Environment-driven settings for the OG image service."""

    def __init__(self):
        self.DEBUG: bool = env_flag("DEBUG", default=False)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.CORS_ORIGINS: List[str] = _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:5173"))

        public_origin = os.getenv("PUBLIC_ORIGIN", "").strip().rstrip("/")
        self.PUBLIC_ORIGIN: Optional[str] = public_origin or None

        self.OG_THEME: str = os.getenv("OG_THEME", "midnight")
        self.APP_TITLE: str = os.getenv("APP_TITLE", "Icebreaker Bingo")
        self.SITE_NAME: str = os.getenv("SITE_NAME", "icebreakerbingo.com")

        self.EDGE_CACHE_MAX_ENTRIES: int = env_int("EDGE_CACHE_MAX_ENTRIES", 512)
        self.RENDER_SETTLE_MS: int = env_int("RENDER_SETTLE_MS", 250)

        decks_file = os.getenv("PROMPT_DECKS_FILE", "").strip()
        self.PROMPT_DECKS_FILE: Optional[Path] = Path(decks_file) if decks_file else None

        self.STATIC_DIR: Path = Path(os.getenv("STATIC_DIR", "static"))

    @property
    def ALL_CORS_ORIGINS(self) -> List[str]:
        origins = list(self.CORS_ORIGINS)
        if self.PUBLIC_ORIGIN and self.PUBLIC_ORIGIN not in origins:
            origins.append(self.PUBLIC_ORIGIN)
        return origins


settings = Settings()
