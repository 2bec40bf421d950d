"""Runtime settings, read from ``STOREOPS_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_FILE = Path(__file__).resolve().parents[3] / "data" / "store.json"


class Settings(BaseSettings):
    # =========================================================================
    # Record store
    # =========================================================================
    backend: Literal["memory", "remote"] = Field(
        default="memory",
        description="'remote' talks to the record API; 'memory' is the local fallback",
    )
    data_file: Path | None = Field(
        default=_DEFAULT_DATA_FILE,
        description="JSON snapshot loaded/saved by the memory backend (unset = volatile)",
    )

    # =========================================================================
    # Remote record API
    # =========================================================================
    api_base_url: str = Field(default="http://localhost:8000/api")
    api_token: str | None = Field(default=None)
    request_timeout: float = Field(default=10.0, gt=0)

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(default="WARNING")
    log_file: Path | None = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="STOREOPS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings(**overrides: object) -> Settings:
    return Settings(**overrides)  # type: ignore[arg-type]
