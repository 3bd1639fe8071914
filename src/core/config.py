"""Configuration Management."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Builder settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Server
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=5001, description="HTTP port")

    # Model
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""), description="Gemini API key"
    )
    gemini_model: str = Field(default="gemini-2.0-flash", description="Gemini model name")
    gemini_temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Model temperature")
    gemini_max_tokens: int = Field(default=8192, gt=0, description="Max output tokens")

    # Upstream resilience
    retry_attempts: int = Field(default=3, ge=0, description="Retries on rate limit")
    retry_initial_delay: float = Field(default=2.0, ge=0.0, description="First backoff delay (seconds)")
    breaker_fail_max: int = Field(default=5, gt=0, description="Failures before the breaker opens")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Breaker reset timeout (seconds)")

    # Validation
    strict_validation: bool = Field(default=True, description="Enforce component/import whitelist")
    max_prompt_length: int = Field(default=10_000, gt=0, description="Max prompt length")

    # Persistence
    data_dir: Path = Field(default=Path("db"), description="State directory")
    snapshot_name: str = Field(default="state.json", description="Snapshot file name")
    default_file: str = Field(default="App.tsx", description="File used when a request names none")

    # Preview
    preview_watchdog_seconds: float = Field(
        default=10.0, ge=0.0, description="Mount deadline before a preview is torn down (0 disables)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    @property
    def snapshot_path(self) -> Path:
        """Full path of the persisted project snapshot."""
        return self.data_dir / self.snapshot_name


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
