"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ExtractionVariant = Literal["normalized", "quadrilateral"]
LogLevel = Literal["critical", "error", "warning", "info", "debug"]

_LOG_LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


class Settings(BaseSettings):
    """Centralized runtime configuration, read once at startup."""

    gemini_api_key: SecretStr | None = Field(
        default=None, validation_alias="GEMINI_API_KEY"
    )

    model: str = Field(
        default="gemini-2.5-flash-lite", validation_alias="LITLENS_MODEL"
    )
    model_provider: str = Field(
        default="google_genai", validation_alias="LITLENS_MODEL_PROVIDER"
    )
    temperature: float | None = Field(
        default=None, validation_alias="LITLENS_TEMPERATURE"
    )

    extraction_variant: ExtractionVariant = Field(
        default="normalized", validation_alias="LITLENS_EXTRACTION_VARIANT"
    )
    # Extraction-only deployments return the stage-one CSV as-is.
    verify_enabled: bool = Field(default=True, validation_alias="LITLENS_VERIFY_ENABLED")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3001, ge=1, le=65535, validation_alias="PORT")
    # Stored in the lowercase form uvicorn expects.
    log_level: LogLevel = Field(default="info", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        protected_namespaces=(),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            level = value.strip().lower()
            return _LOG_LEVEL_ALIASES.get(level, level)
        return value

    @property
    def api_key(self) -> str | None:
        if self.gemini_api_key is None:
            return None
        value = self.gemini_api_key.get_secret_value().strip()
        return value or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["ExtractionVariant", "LogLevel", "Settings", "get_settings"]
