"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class OmdbSettings(BaseModel):
    api_key: SecretStr = Field(
        default=SecretStr("trilogy"),
        description="OMDb API key; the default is the public demo key.",
    )
    base_url: AnyHttpUrl = Field(default="http://www.omdbapi.com/")


class RequestPolicy(BaseModel):
    """Per-request transport limits for upstream calls.

    Fixed product constants, deliberately not read from the environment.
    """

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = Field(default=8.0, gt=0)
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0)


class PaginationPolicy(BaseModel):
    """Shape of the logical pages exposed to callers."""

    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default=12, ge=1)
    max_pages: int = Field(default=3, ge=1)
    max_total_results: int = Field(default=36, ge=1)
    upstream_page_size: int = Field(default=10, ge=1)
    max_fetch_attempts: int = Field(default=5, ge=1)
    min_query_length: int = Field(default=2, ge=1)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MOVIESEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    omdb: OmdbSettings = Field(default_factory=OmdbSettings)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "OmdbSettings",
    "PaginationPolicy",
    "RequestPolicy",
    "get_settings",
]
