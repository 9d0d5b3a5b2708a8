"""
Configuration management for bundlekit.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for module ingestion.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class IngestionConfig(BaseModel):
    """Module ingestion policy."""

    include_in_fusing_by_default: bool = Field(
        default=True,
        description="Fusing eligibility of non-base modules that declare no dist:fusing attribute",
    )


class Config(BaseModel):
    """Root configuration for bundlekit."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto", description="Log renderer; 'auto' picks console on a TTY"
    )
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        return cls(
            log_level=os.environ.get("BUNDLEKIT_LOG_LEVEL", "INFO"),  # type: ignore
            log_format=os.environ.get("BUNDLEKIT_LOG_FORMAT", "auto"),  # type: ignore
            ingestion=IngestionConfig(
                include_in_fusing_by_default=(
                    os.environ.get("BUNDLEKIT_FUSE_BY_DEFAULT", "true").lower() == "true"
                ),
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
