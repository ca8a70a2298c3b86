# detect_gha_jobs/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for detect-gha-jobs.

    Values load in this order of precedence:
      1) Environment variables (prefixed GHA_JOBS_)
      2) .env file in the working directory
      3) Defaults below

    The defaults reproduce the documented command-line behavior; nothing here
    needs to be set for normal use.
    """

    # ---- Discovery ----
    WORKFLOWS_SEGMENT: str = Field(default=".github/workflows", description="Path segment a workflow file must sit under")
    WORKFLOW_SUFFIXES: Tuple[str, ...] = Field(default=(".yml", ".yaml"), description="Accepted filename suffixes")

    # ---- Report ----
    SEPARATOR_WIDTH: int = Field(default=40, ge=0, description="Width of the per-file separator in directory mode")

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.WARNING)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./detect-gha-jobs.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="GHA_JOBS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("WORKFLOWS_SEGMENT")
    @classmethod
    def _segment_non_empty(cls, v: str) -> str:
        v = v.strip().replace("\\", "/")
        if not v:
            raise ValueError("WORKFLOWS_SEGMENT cannot be empty")
        return v

    @field_validator("WORKFLOW_SUFFIXES")
    @classmethod
    def _suffixes_non_empty(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if not v or any(not s for s in v):
            raise ValueError("WORKFLOW_SUFFIXES must list at least one non-empty suffix")
        return tuple(v)

    @property
    def separator(self) -> str:
        return "-" * self.SEPARATOR_WIDTH


# --------- Public accessor (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    return Settings()
