"""Tests for application settings."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError
from spotgen.config import APIConfig, GeneratorConfig
from spotgen.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from .env file and shell environment."""
    for key in list(os.environ.keys()):
        if key.startswith("SPOTGEN_"):
            monkeypatch.delenv(key, raising=False)
    # Change to temp dir so Settings won't find .env file
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.spotify_client_id is None
        assert settings.spotify_client_secret is None
        assert settings.lastfm_api_key is None
        assert settings.market is None
        assert settings.timeout == 10.0
        assert settings.concurrency == 1
        assert settings.log_level == "WARNING"


class TestLogLevel:
    """Tests for LogLevel type validation."""

    @pytest.mark.parametrize(
        ("input_level", "expected"),
        [
            ("DEBUG", "DEBUG"),
            ("info", "INFO"),
            ("WaRnInG", "WARNING"),
            ("error", "ERROR"),
        ],
    )
    def test_normalizes_to_uppercase(self, input_level: str, expected: str) -> None:
        assert Settings(log_level=input_level).log_level == expected

    @pytest.mark.parametrize("level", ["TRACE", "verbose", ""])
    def test_rejects_invalid_levels(self, level: str) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level=level)


class TestEnvironment:
    """Tests for reading SPOTGEN_* environment variables."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPOTGEN_SPOTIFY_CLIENT_ID", "client-id")
        monkeypatch.setenv("SPOTGEN_SPOTIFY_CLIENT_SECRET", "client-secret")
        monkeypatch.setenv("SPOTGEN_LASTFM_API_KEY", "lastfm-key")
        monkeypatch.setenv("SPOTGEN_MARKET", "GB")
        monkeypatch.setenv("SPOTGEN_CONCURRENCY", "8")

        settings = Settings()

        assert settings.spotify_client_id == "client-id"
        assert settings.spotify_client_secret is not None
        assert settings.spotify_client_secret.get_secret_value() == "client-secret"
        assert settings.lastfm_api_key is not None
        assert settings.lastfm_api_key.get_secret_value() == "lastfm-key"
        assert settings.market == "GB"
        assert settings.concurrency == 8

    def test_reads_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            "SPOTGEN_SPOTIFY_CLIENT_ID=from-file\n", encoding="utf-8"
        )
        assert Settings().spotify_client_id == "from-file"

    def test_secrets_are_masked(self) -> None:
        settings = Settings(spotify_client_secret="hunter2")
        assert "hunter2" not in repr(settings)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestValidation:
    """Tests for field bounds."""

    @pytest.mark.parametrize("concurrency", [0, 33, -1])
    def test_rejects_out_of_range_concurrency(self, concurrency: int) -> None:
        with pytest.raises(ValidationError):
            Settings(concurrency=concurrency)

    @pytest.mark.parametrize("concurrency", [1, 32])
    def test_accepts_concurrency_bounds(self, concurrency: int) -> None:
        assert Settings(concurrency=concurrency).concurrency == concurrency

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            Settings(timeout=0)


class TestDerivedConfig:
    """Tests for the config objects built from settings."""

    def test_api_config(self) -> None:
        config = Settings(timeout=3.5, market="US").api_config
        assert config == APIConfig(timeout=3.5, market="US")
        assert config.spotify_api_url == "https://api.spotify.com/v1"

    def test_generator_config(self) -> None:
        config = Settings(concurrency=4).generator_config
        assert config == GeneratorConfig(concurrency=4)
        assert not config.fetch_lastfm
