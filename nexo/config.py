"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROMPT_CONFIG = Path(__file__).resolve().parent / "prompts" / "coach_prompt.yaml"

_PLACEHOLDER_KEYS = {"", "your_gemini_api_key_here", "change-me", "changeme"}


class Settings(BaseSettings):
    """Centralised application settings derived from environment variables."""

    gemini_api_key: str | None = Field(
        default=None,
        description="API key for the Gemini generateContent endpoint.",
    )
    gemini_model: str = Field(default="gemini-1.5-flash")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Base URL the model name and ':generateContent' are appended to.",
    )

    api_base_url: str = Field(
        default="https://apinest-production.up.railway.app",
        description="Base URL of the NEXO REST backend (no trailing slash).",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    prompt_config_path: Path = Field(default=DEFAULT_PROMPT_CONFIG)

    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("api_base_url", "gemini_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper

    @property
    def is_gemini_configured(self) -> bool:
        """True when a usable (non-placeholder) Gemini key is present."""

        if self.gemini_api_key is None:
            return False
        return self.gemini_api_key.strip().lower() not in _PLACEHOLDER_KEYS


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    settings = Settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    return settings
