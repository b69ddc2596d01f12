"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    tmdb_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TMDB_API_KEY", "VITE_API_KEY"),
    )
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_image_base: str = Field(default="https://image.tmdb.org/t/p")
    tmdb_region: str = Field(default="AU")
    tmdb_timeout: float = Field(default=10.0)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
