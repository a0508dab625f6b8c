"""
Environment and configuration settings for halting analysis.

Uses pydantic-settings for environment variable management with validation.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HALTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Analysis
    default_fault_set_size: int = Field(
        default=1,
        description="Number of nodes failed together in each simulation pass",
    )

    # Telemetry
    telemetry_enabled: bool = Field(
        default=False,
        description="Export traces and metrics over OTLP",
    )
    service_name: str = Field(default="halting", description="OpenTelemetry service name")
    service_version: str = Field(default="0.1.0", description="OpenTelemetry service version")
    otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP collector endpoint",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    # CLI Configuration
    default_output_format: str = Field(
        default="human",
        description="Default output format (human/json)",
    )
    default_home: Optional[str] = Field(
        default=None,
        description="Home node id used when a topology file does not name one",
    )

    def resolve_log_level(self, verbose: bool = False) -> int:
        """Get the numeric logging level, forcing DEBUG in verbose mode."""
        if verbose:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.upper())
        # getLevelName returns "Level X" for unknown names
        return level if isinstance(level, int) else logging.WARNING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
