"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from src.config import ActualSettings, AppSettings, get_settings, validate_all_settings

ACTUAL_ENV = {
    "ACTUAL_SERVER_URL": "http://actual.local:5007/",
    "ACTUAL_PASSWORD": "api-key",
    "ACTUAL_SYNC_ID": "budget-1",
    "ACTUAL_BUDGET_ENCRYPTION_KEY": "secret",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Start every test without ACTUAL_* variables or a .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ACTUAL_ENV:
        monkeypatch.delenv(name, raising=False)
    for name in ("PORT", "LOG_LEVEL", "STARTUP_CONNECT_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def actual_env(monkeypatch):
    for name, value in ACTUAL_ENV.items():
        monkeypatch.setenv(name, value)


class TestActualSettings:

    def test_loads_from_environment(self, actual_env):
        settings = ActualSettings()
        assert settings.server_url == "http://actual.local:5007"
        assert settings.sync_id == "budget-1"
        assert settings.request_timeout_seconds == 30.0

    @pytest.mark.parametrize("missing", sorted(ACTUAL_ENV))
    def test_every_variable_is_required(self, actual_env, monkeypatch, missing):
        monkeypatch.delenv(missing)
        with pytest.raises(ValidationError):
            ActualSettings()

    def test_empty_value_rejected(self, actual_env, monkeypatch):
        monkeypatch.setenv("ACTUAL_PASSWORD", "")
        with pytest.raises(ValidationError):
            ActualSettings()

    def test_reads_dotenv_file(self, tmp_path):
        lines = [f"{name}={value}" for name, value in ACTUAL_ENV.items()]
        (tmp_path / ".env").write_text("\n".join(lines) + "\n")
        assert ActualSettings().budget_encryption_key == "secret"


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings()
        assert settings.port == 3000
        assert settings.log_level == "INFO"
        assert settings.startup_connect_attempts == 3

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = AppSettings()
        assert settings.port == 8080
        assert settings.log_level == "DEBUG"

    def test_only_served_settings(self):
        """Test every app setting is one the server actually reads."""
        assert set(AppSettings.model_fields) == {
            "host", "port", "log_level", "startup_connect_attempts",
        }

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppSettings()


class TestValidateAllSettings:

    def test_all_valid(self, actual_env):
        results = validate_all_settings()
        assert results == {"actual": True, "app": True}

    def test_reports_missing_upstream_config(self):
        results = validate_all_settings()
        assert results["actual"] is False
        assert "server_url" in results["actual_error"]
        assert results["app"] is True

    def test_settings_are_cached(self, actual_env):
        assert get_settings() is get_settings()
