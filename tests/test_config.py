"""Tests for settings and logging setup."""

import logging

import pytest
import structlog

from catalog_mcp.config import CatalogClientConfig, Settings, get_settings
from catalog_mcp.exceptions import ConfigurationError
from catalog_mcp.logging import configure_logging


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATALOG_API_KEY",
        "DATALOG_API",
        "DATALOG_URI",
        "SESSION_ID",
        "HTTP_TIMEOUT_SECONDS",
        "HTTP_PORT",
        "MCP_TRANSPORT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.DATALOG_API_KEY == ""
        assert settings.DATALOG_API == "https://studio.igot.ai"
        assert settings.DATALOG_URI == "/v1/catalog"
        assert settings.MCP_TRANSPORT == "stdio"
        assert settings.client_config().base_url == "https://studio.igot.ai/v1/catalog"
        assert settings.client_config().timeout is None

    def test_reads_environment(self, clean_env):
        clean_env.setenv("DATALOG_API_KEY", "secret")
        clean_env.setenv("DATALOG_API", "https://catalog.example/")
        clean_env.setenv("DATALOG_URI", "api/v2")
        clean_env.setenv("SESSION_ID", "chan-1")
        clean_env.setenv("HTTP_TIMEOUT_SECONDS", "12.5")

        config = get_settings().client_config()

        assert config.api_key == "secret"
        assert config.base_url == "https://catalog.example/api/v2"
        assert config.session_id == "chan-1"
        assert config.timeout == 12.5

    def test_empty_session_id_means_none(self, clean_env):
        clean_env.setenv("SESSION_ID", "")

        assert get_settings().client_config().session_id is None

    def test_settings_are_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_invalid_value_raises_configuration_error(self, clean_env):
        clean_env.setenv("HTTP_PORT", "not-a-port")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert "HTTP_PORT" in exc_info.value.message


class TestClientConfig:
    """Tests for the client connection settings."""

    def test_has_api_key(self):
        assert CatalogClientConfig(api_key="k").has_api_key
        assert not CatalogClientConfig().has_api_key

    def test_is_immutable(self):
        config = CatalogClientConfig(api_key="k")

        with pytest.raises(ValueError):
            config.api_key = "other"


class TestLogging:
    """Tests for logging configuration."""

    def test_logs_go_to_stderr_only(self, capsys, restore_logging):
        configure_logging(level="INFO", fmt="text")

        logging.getLogger("catalog_mcp.test").info("hello from stdlib")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello from stdlib" in captured.err

    def test_json_format(self, capsys, restore_logging):
        configure_logging(level="DEBUG", fmt="json")

        structlog.get_logger("catalog_mcp.test").info("json_event", tool_name="list_catalogs")

        err = capsys.readouterr().err
        assert '"event": "json_event"' in err
        assert '"tool_name": "list_catalogs"' in err

    def test_level_and_noise_loggers(self, restore_logging):
        configure_logging(level="warning")

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
