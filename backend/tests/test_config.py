"""
Greeter Backend - Configuration Tests
=======================================

What:  Settings defaults, environment overrides and validation.
"""

import pytest

from app.config import Settings, get_settings, load_settings
from app.exceptions import ConfigurationError


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SERVER_HOST", "SERVER_PORT", "LOG_LEVEL", "ACCESS_LOG"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.server_host == "0.0.0.0"
        assert settings.server_port == 8080
        assert settings.log_level == "INFO"
        assert settings.access_log is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SERVER_HOST", "127.0.0.1")
        monkeypatch.setenv("SERVER_PORT", "9090")
        monkeypatch.setenv("ACCESS_LOG", "false")

        settings = Settings(_env_file=None)

        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 9090
        assert settings.access_log is False
        assert settings.base_url == "http://127.0.0.1:9090"

    def test_base_url_brackets_ipv6_host(self):
        settings = Settings(_env_file=None, server_host="::1", server_port=9000)
        assert settings.base_url == "http://[::1]:9000"

    def test_log_level_is_normalised(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError, match="Invalid log_level"):
            Settings(_env_file=None, log_level="LOUD")

    @pytest.mark.parametrize("port", [0, 80, 1023, 65536])
    def test_port_out_of_range_rejected(self, port):
        with pytest.raises(ValueError):
            Settings(_env_file=None, server_port=port)


class TestLoadSettings:

    def test_none_overrides_fall_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("SERVER_PORT", "9191")

        settings = load_settings(server_host=None, server_port=None)

        assert settings.server_port == 9191

    def test_explicit_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SERVER_PORT", "9191")

        settings = load_settings(server_port=9292, log_level="error")

        assert settings.server_port == 9292
        assert settings.log_level == "ERROR"

    def test_validation_failure_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(server_port=80, log_level="LOUD")

        message = exc_info.value.message
        assert message.startswith("Configuration validation failed")
        assert "server_port" in message
        assert "log_level" in message

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
