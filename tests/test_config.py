"""
Tests for environment-based configuration.
"""

import pytest

from seomoz.collector import MozClient
from seomoz.errors import ConfigurationError
from seomoz.utils.config import DEFAULT_API_URL, Settings, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SEOMOZ_* variables so tests start from defaults."""
    for var in (
        "SEOMOZ_ACCESS_ID",
        "SEOMOZ_SECRET_KEY",
        "SEOMOZ_API_URL",
        "SEOMOZ_MAX_BATCH_URLS",
        "SEOMOZ_MAX_CONCURRENCY",
        "SEOMOZ_TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestSettings:
    """Test Settings loading."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.SEOMOZ_ACCESS_ID == ""
        assert settings.SEOMOZ_API_URL == DEFAULT_API_URL
        assert settings.SEOMOZ_MAX_BATCH_URLS == 10
        assert settings.SEOMOZ_MAX_CONCURRENCY is None
        assert settings.LOG_LEVEL == "WARNING"
        assert not settings.has_credentials

    def test_reads_environment(self, clean_env):
        clean_env.setenv("SEOMOZ_ACCESS_ID", "my_id")
        clean_env.setenv("SEOMOZ_SECRET_KEY", "my_secret")
        clean_env.setenv("SEOMOZ_MAX_CONCURRENCY", "4")

        settings = Settings(_env_file=None)
        assert settings.SEOMOZ_ACCESS_ID == "my_id"
        assert settings.SEOMOZ_SECRET_KEY == "my_secret"
        assert settings.SEOMOZ_MAX_CONCURRENCY == 4
        assert settings.has_credentials

    def test_reads_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SEOMOZ_ACCESS_ID=file_id\nSEOMOZ_SECRET_KEY=file_secret\n")

        settings = Settings(_env_file=env_file)
        assert settings.SEOMOZ_ACCESS_ID == "file_id"
        assert settings.SEOMOZ_SECRET_KEY == "file_secret"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestClientFromEnv:
    """Test building a client from the environment."""

    @pytest.mark.asyncio
    async def test_env_client(self, clean_env):
        clean_env.setenv("SEOMOZ_ACCESS_ID", "my_id")
        clean_env.setenv("SEOMOZ_SECRET_KEY", "my_secret")
        clean_env.setenv("SEOMOZ_MAX_BATCH_URLS", "5")

        async with MozClient.from_env(Settings(_env_file=None)) as client:
            assert client.access_id == "my_id"
            assert client.secret_key == "my_secret"
            assert client.max_batch_urls == 5

    @pytest.mark.asyncio
    async def test_keyword_overrides(self, clean_env):
        settings = Settings(_env_file=None, SEOMOZ_ACCESS_ID="my_id", SEOMOZ_SECRET_KEY="s")
        async with MozClient.from_env(settings, max_concurrency=2) as client:
            assert client.max_concurrency == 2

    def test_bad_endpoint_setting(self, clean_env):
        clean_env.setenv("SEOMOZ_API_URL", "not-a-url")
        with pytest.raises(ConfigurationError):
            MozClient.from_env(Settings(_env_file=None))

    @pytest.mark.asyncio
    async def test_defaults_to_cached_settings(self, clean_env):
        """Without explicit settings the shared cached instance is used."""
        clean_env.setenv("SEOMOZ_ACCESS_ID", "cached_id")
        clean_env.setenv("SEOMOZ_SECRET_KEY", "cached_secret")
        get_settings.cache_clear()
        try:
            async with MozClient.from_env() as client:
                assert client.access_id == "cached_id"
                assert client.secret_key == "cached_secret"

            clean_env.setenv("SEOMOZ_ACCESS_ID", "changed_id")
            async with MozClient.from_env() as client:
                assert client.access_id == "cached_id"
        finally:
            get_settings.cache_clear()
