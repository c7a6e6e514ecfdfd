"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Standards ===
    standards_file: Optional[Path] = Field(
        default=None,
        description="YAML file with an alternative category standard table"
    )

    # === Report ===
    cutoff_rounding: bool = Field(
        default=True,
        description="Round cutoff times to whole seconds in reports"
    )
    include_detailed_results: bool = Field(
        default=True,
        description="Attach per-athlete rows to analysis reports"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept 'debug', 'Info', etc."""
        return v.upper()

    @field_validator('standards_file', mode='before')
    @classmethod
    def empty_path_is_none(cls, v):
        """Treat STANDARDS_FILE='' as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
