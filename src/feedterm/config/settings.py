"""Configuration management using pydantic-settings.

Supports environment variables (``FEEDTERM_`` prefix) and .env file loading.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDTERM_",
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = Field(
        default=None,
        description="Log destination; interactive mode falls back to ~/.rss/feedterm.log",
    )

    # Feed list and archive
    feeds_file: Path = Field(
        default=Path.home() / ".rss" / "urls.txt",
        description="Newline-delimited list of feed URLs",
    )
    archive_dir: Path = Field(
        default=Path.home() / ".rss" / "archive",
        description="Folder holding stored feed documents",
    )
    editor: str = Field(default="vim", description="Editor used by the edit command")

    # RSS
    fetch_timeout: int = 30
    user_agent: str = "feedterm/0.1 (terminal feed reader)"

    # Links
    paywalls: list[str] = Field(
        default=["https://www.ft.com", "https://rss.nytimes.com"],
        description="Feed URL prefixes whose article links go through the archive mirror",
    )
    archive_mirror: str = "https://archive.is/"

    # Display
    max_age_hours: int = Field(default=24, ge=0)
    wrap_width: int = Field(default=72, ge=10)

    # Reader mode
    reader_settle_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Delay after page load before reader content is queried",
    )


# Global singleton instance
settings = Settings()
