"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aetherfit.models.schemas import Activity
from aetherfit.services.prompt_builder import DEFAULT_PROMPT_PATH


class Settings(BaseSettings):
    """Centralised application settings derived from environment variables."""

    anthropic_api_key: str | None = Field(
        default=None,
        description="Credential for the generation service. Missing means demo (fallback) mode.",
    )
    generation_model: str = Field(default="claude-sonnet-4-5-20250929")
    generation_temperature: float = Field(default=0.5, ge=0.0, le=1.0)
    generation_max_tokens: int = Field(default=2048, ge=256)
    generation_timeout_seconds: float = Field(default=30.0, gt=0)
    prompt_config_path: Path = Field(default=DEFAULT_PROMPT_PATH)

    analysis_debounce_seconds: float = Field(
        default=0.3,
        ge=0.0,
        description="Delay before a dashboard evaluation reaches the generation service.",
    )
    telemetry_seed: int | None = Field(
        default=None,
        description="Seed for the mock telemetry generator (null for fresh values each call).",
    )

    demo_user_id: str = Field(default="demo")
    demo_user_name: str = Field(default="Alex Rivera")
    demo_user_email: str = Field(default="alex@example.com")
    demo_user_location: str = Field(default="Golden Gate Park")
    demo_user_activity: Activity = Field(default=Activity.RUNNING)

    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))
    log_max_bytes: int = Field(default=5_000_000, ge=1024)
    log_backup_count: int = Field(default=3, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("anthropic_api_key")
    @classmethod
    def blank_key_is_missing(cls, value: str | None) -> str | None:
        """Treat empty or placeholder keys as not configured."""

        if value is None or value.strip().lower() in {"", "demo-key", "change-me", "changeme"}:
            return None
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper

    @property
    def generation_configured(self) -> bool:
        return self.anthropic_api_key is not None


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    settings = Settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    return settings
