"""Centralised settings loaded from environment / .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_CHUNK_SIZE = 512 * 1024


class Settings(BaseSettings):
    """Runtime configuration for pkg-merge.

    Every variable lives in the flat ``PKG_MERGE_`` namespace, e.g.
    ``PKG_MERGE_CHUNK_SIZE=1048576``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PKG_MERGE_",
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Naming convention ─────────────────────────────────────
    package_extension: str = Field(default=".pkg", pattern=r"^\.[^.]+$")
    merged_marker: str = Field(default="-merged", min_length=1)

    # ── Copy behaviour ────────────────────────────────────────
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)

    # ── Logging ───────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached :class:`Settings` singleton."""
    return Settings()
