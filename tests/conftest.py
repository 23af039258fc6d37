"""Shared fixtures."""

import pytest

from trade_with_me.config.settings import Settings, get_settings

SETTINGS_ENV_VARS = (
    "DB_USERNAME",
    "DB_PASSWORD",
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DATABASE_URL",
    "SCHEMA_FILE",
    "API_BASE_URL",
    "REQUEST_TIMEOUT_SECONDS",
    "ENVIRONMENT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Run every test without inherited settings and inside a scratch directory."""
    for name in SETTINGS_ENV_VARS:
        # setenv first so the original state is restored afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)
