"""Configuration via pydantic-settings with .env support."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ReplySegmenterSettings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="REPLY_SEGMENTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Input
    input_dir: Path = Path("input")
    input_pattern: str = "*.txt"
    input_encoding: str = "utf-8"

    # Output
    output_dir: Path = Path("output/replies")
    output_format: Literal["text", "json"] = "text"

    # Logging
    log_level: str = "INFO"

    def ensure_directories(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
