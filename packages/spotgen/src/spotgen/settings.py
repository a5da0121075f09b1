"""Application settings using pydantic-settings."""

from functools import cache
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from spotgen.config import APIConfig, GeneratorConfig

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPOTGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Spotify client credentials
    spotify_client_id: str | None = Field(
        default=None, description="Spotify application client ID"
    )
    spotify_client_secret: SecretStr | None = Field(
        default=None, description="Spotify application client secret"
    )

    # Last.fm
    lastfm_api_key: SecretStr | None = Field(
        default=None, description="Last.fm API key"
    )

    # Requests
    market: str | None = Field(
        default=None, description="Market code for track requests (e.g. US)"
    )
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout (seconds)")
    concurrency: int = Field(
        default=1, ge=1, le=32, description="Entries resolved concurrently"
    )

    log_level: LogLevel = Field(default="WARNING", description="Log level")

    @property
    def api_config(self) -> APIConfig:
        return APIConfig(timeout=self.timeout, market=self.market)

    @property
    def generator_config(self) -> GeneratorConfig:
        return GeneratorConfig(concurrency=self.concurrency)


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
