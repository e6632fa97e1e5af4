"""Configuration models using Pydantic for validation."""

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_dir: Path = Field(
        default_factory=lambda: Path.home() / ".filer" / "logs",
        description="Directory for log files",
    )
    max_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1024, description="Max log file size before rotation (bytes)"
    )
    backup_count: int = Field(default=5, ge=1, description="Number of rotated log files to keep")
    console_enabled: bool = Field(
        default=False, description="Enable console logging (draws over the triage screen)"
    )
    file_enabled: bool = Field(default=True, description="Enable file logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class FilerConfig(BaseModel):
    """Main configuration for filer."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    source: Path = Field(default=Path("."), description="Directory to triage")
    target: Path | None = Field(
        default=None, description="Directory for kept files (default: keep in place)"
    )
    pattern: str | None = Field(
        default=None, description="Regular expression selecting which files to triage"
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    @field_validator("source", "target")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ~ in configured directories."""
        if v is None:
            return v
        return v.expanduser()

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str | None) -> str | None:
        """Ensure the filter pattern is a valid regular expression."""
        if not v:
            return None
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid pattern {v!r}: {e}") from e
        return v
