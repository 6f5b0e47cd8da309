"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/fragshelf.db"
    cors_origins: tuple[str, ...] = ("*",)

    rank_min_threshold: float = 15.0
    rank_top_n: int = 10
    rank_climate_gate: float = 20.0
    presented_results: int = 3


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/fragshelf.db"),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
        rank_min_threshold=float(os.getenv("RANK_MIN_THRESHOLD", "15")),
        rank_top_n=int(os.getenv("RANK_TOP_N", "10")),
        rank_climate_gate=float(os.getenv("RANK_CLIMATE_GATE", "20")),
        presented_results=int(os.getenv("PRESENTED_RESULTS", "3")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
