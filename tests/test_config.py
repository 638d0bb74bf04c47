"""
Tests for Neverstale configuration settings.

Author: Neverstale
Date: 2026-10-19
"""

import pytest
from pydantic import ValidationError

from neverstale.config import NeverstaleSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test away from any real .env file or NEVERSTALE_ variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("API_KEY", "BASE_URI", "TIMEOUT_SECONDS", "VERIFY_SSL", "LOG_LEVEL"):
        monkeypatch.delenv(f"NEVERSTALE_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestNeverstaleSettings:
    """Test NeverstaleSettings configuration."""

    def test_default_settings(self):
        settings = NeverstaleSettings()

        assert settings.api_key is None
        assert settings.base_uri == "https://app.neverstale.io/api/v1/"
        assert settings.timeout_seconds == 30.0
        assert settings.verify_ssl is True
        assert settings.log_level == "WARNING"

    def test_environment_variable_override(self, monkeypatch):
        monkeypatch.setenv("NEVERSTALE_API_KEY", "env-key")
        monkeypatch.setenv("NEVERSTALE_BASE_URI", "https://staging.example.com/api/v1/")
        monkeypatch.setenv("NEVERSTALE_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("NEVERSTALE_LOG_LEVEL", "debug")

        settings = NeverstaleSettings()

        assert settings.api_key == "env-key"
        assert settings.base_uri == "https://staging.example.com/api/v1/"
        assert settings.timeout_seconds == 12.5
        assert settings.log_level == "DEBUG"

    def test_invalid_base_uri(self):
        with pytest.raises(ValueError):
            NeverstaleSettings(base_uri="app.neverstale.io")

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            NeverstaleSettings(timeout_seconds=0)


class TestGetSettings:
    """Test cached settings access."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "neverstale.env"
        env_file.write_text("NEVERSTALE_API_KEY=file-key\n")

        settings = get_settings(str(env_file))

        assert settings.api_key == "file-key"

    def test_dotenv_in_working_directory(self, tmp_path):
        (tmp_path / ".env").write_text("NEVERSTALE_API_KEY=dotenv-key\n")

        assert get_settings().api_key == "dotenv-key"
