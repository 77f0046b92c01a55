"""Tests for settings and logging configuration."""

import pytest
from pydantic import ValidationError

from sebenza.config import FlatSettings, configure_logging, get_logger, get_settings


class TestFlatSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        for name in ("LLM_PROVIDER", "REPORT_CURRENCY_SYMBOL", "SEBENZA_DATA_FILE", "LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        settings = FlatSettings(_env_file=None)

        assert settings.llm_provider == "claude"
        assert settings.currency_symbol == "$"
        assert settings.data_file is None
        assert settings.log_format == "console"
        assert settings.assistant_name == "Sebenza AI"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test values are read from environment variables."""
        monkeypatch.setenv("LLM_PROVIDER", "ollama")
        monkeypatch.setenv("OLLAMA_MODEL", "llama3:8b")
        monkeypatch.setenv("LLM_TEMPERATURE", "0.7")
        monkeypatch.setenv("SEBENZA_DATA_FILE", str(tmp_path / "data.yaml"))

        settings = FlatSettings(_env_file=None)

        assert settings.llm_provider == "ollama"
        assert settings.ollama_model == "llama3:8b"
        assert settings.llm_temperature == 0.7
        assert settings.data_file == tmp_path / "data.yaml"

    def test_api_keys_are_secret(self, monkeypatch):
        """Test API keys are not exposed in repr."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        settings = FlatSettings(_env_file=None)

        assert "sk-ant-test" not in repr(settings)
        assert settings.anthropic_api_key.get_secret_value() == "sk-ant-test"

    def test_unknown_provider_rejected(self, monkeypatch):
        """Test an unsupported provider fails validation."""
        monkeypatch.setenv("LLM_PROVIDER", "watson")

        with pytest.raises(ValidationError):
            FlatSettings(_env_file=None)

    def test_get_settings_is_cached(self):
        """Test settings are built once."""
        get_settings.cache_clear()

        assert get_settings() is get_settings()


class TestLogging:
    """Tests for structlog configuration."""

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_configure_and_log(self, log_format):
        """Test both renderers accept log events."""
        configure_logging(level="DEBUG", format=log_format)

        logger = get_logger("sebenza.test")
        logger.info("logging_configured", format=log_format)
