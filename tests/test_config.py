"""Unit tests for settings and structlog configuration."""

from __future__ import annotations

import logging

import pytest
import structlog

from src.solve360.config import Environment, Settings, get_settings
from src.solve360.logging import configure_structlog


# ── Settings ───────────────────────────────────────────────────────────────


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SOLVE360_URL", "SOLVE360_USERNAME", "SOLVE360_TOKEN", "SOLVE360_DEFAULT_OWNERSHIP"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.SOLVE360_URL == "https://secure.solve360.com"
        assert settings.SOLVE360_DEFAULT_OWNERSHIP == ""
        assert settings.SOLVE360_TIMEOUT == 30.0
        assert settings.ENVIRONMENT == Environment.development

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SOLVE360_USERNAME", "ops@example.com")
        monkeypatch.setenv("SOLVE360_TOKEN", "abc123")
        monkeypatch.setenv("SOLVE360_DEFAULT_OWNERSHIP", "536")

        settings = Settings(_env_file=None)

        assert settings.basic_auth == ("ops@example.com", "abc123")
        assert settings.SOLVE360_DEFAULT_OWNERSHIP == "536"

    def test_base_url_strips_trailing_slash(self, settings):
        assert settings.base_url == "https://crm.test"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


# ── Logging ────────────────────────────────────────────────────────────────


class TestConfigureStructlog:
    @pytest.fixture(autouse=True)
    def _reset_structlog(self):
        root = logging.getLogger()
        original_level = root.level
        yield
        structlog.reset_defaults()
        root.setLevel(original_level)

    def test_production_renders_json(self):
        configure_structlog(Settings(_env_file=None, ENVIRONMENT="production"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self):
        configure_structlog(Settings(_env_file=None, ENVIRONMENT="development"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_log_level_filters_stdlib_and_structlog(self):
        configure_structlog(Settings(_env_file=None, LOG_LEVEL="warning"))

        processors = structlog.get_config()["processors"]
        assert processors[0] is structlog.stdlib.filter_by_level
        assert logging.getLogger().level == logging.WARNING
        assert not logging.getLogger("src.solve360.record").isEnabledFor(logging.INFO)
