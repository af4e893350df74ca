"""Mini README: Centralised configuration models and helpers for DroneFleet.

Structure:
    * FleetSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables controlling the
    project-root marker and data directory used for path resolution, the
    entity store sharding, and logging. The configuration is cached so the cost of validation is
    incurred only once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class FleetSettings(BaseSettings):
    """Runtime configuration for the DroneFleet shell and services."""

    data_directory: Optional[Path] = Field(
        Path("data"),
        description="Directory searched right after the project root for relative import and export paths.",
    )
    root_marker: str = Field(
        "pyproject.toml",
        description="File name identifying the project root when resolving relative paths.",
    )
    store_shards: int = Field(
        16,
        description="Number of independently locked shards in the in-memory drone store.",
        ge=1,
        le=256,
    )
    log_level: str = Field(
        "INFO",
        description="Logging level name applied to the root logger by the CLI.",
    )
    log_file: Optional[Path] = Field(
        None,
        description="Optional file receiving a copy of every log line.",
    )

    class Config:
        env_prefix = "DRONEFLEET_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", "log_file", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        """Ensure configured paths expand user directories."""

        if value is None or str(value).strip() == "":
            return None
        return Path(value).expanduser().resolve()

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Accept lower-case level names from the environment."""

        normalised = value.strip().upper()
        if normalised not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return normalised


@lru_cache()
def get_settings() -> FleetSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FleetSettings()
