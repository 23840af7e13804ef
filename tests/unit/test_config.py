"""Configuration tests."""

import pytest

from evento.core.config import Settings


def test_settings_defaults(monkeypatch):
    """Defaults apply when the environment is silent."""
    monkeypatch.delenv("EVENTO_LOG_LEVEL", raising=False)
    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.log_level == "INFO"
    assert settings.enable_cache is True
    assert settings.max_template_nodes == 500
    assert settings.cors_origins == ["*"]


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("EVENTO_PORT", "9090")
    monkeypatch.setenv("EVENTO_ENABLE_CACHE", "false")
    settings = Settings(_env_file=None)

    assert settings.port == 9090
    assert settings.enable_cache is False


def test_settings_validation():
    with pytest.raises(Exception):
        Settings(port=0)
    with pytest.raises(Exception):
        Settings(cache_size=0)
