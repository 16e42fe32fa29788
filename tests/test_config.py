"""Unit tests for configuration and logging setup."""
import logging

import pytest
from pydantic import ValidationError

from duochat.config import DEFAULT_SYSTEM_PROMPT, AppConfig
from duochat.log import setup_logging


class TestAppConfig:
    """Tests for AppConfig.from_env."""

    def test_defaults_from_empty_environment(self):
        """Test the defaults when nothing is set."""
        config = AppConfig.from_env({})

        assert config.gemini_api_key is None
        assert config.cysic_api_key is None
        assert config.cysic_base_url == "https://api-ai.cysic.xyz/api/ai"
        assert config.system_prompt == DEFAULT_SYSTEM_PROMPT
        assert config.strict_models is False
        assert config.upstream_max_retries == 0
        assert config.upstream_timeout is None
        assert (config.host, config.port) == ("127.0.0.1", 8000)
        assert config.log_level == "INFO"
        assert config.cors_origins == ["http://localhost:3000"]

    def test_reads_environment(self):
        """Test that every variable is honored."""
        config = AppConfig.from_env({
            "GEMINI_API_KEY": "g-key",
            "CYSIC_API_KEY": "c-key",
            "CYSIC_BASE_URL": "https://cysic.example/api",
            "DUOCHAT_SYSTEM_PROMPT": "Be brief",
            "DUOCHAT_STRICT_MODELS": "yes",
            "DUOCHAT_UPSTREAM_MAX_RETRIES": "2",
            "DUOCHAT_UPSTREAM_TIMEOUT": "30",
            "DUOCHAT_HOST": "0.0.0.0",
            "DUOCHAT_PORT": "9000",
            "DUOCHAT_LOG_LEVEL": "debug",
            "DUOCHAT_CORS_ORIGINS": "http://a.test, http://b.test,",
        })

        assert config.gemini_api_key == "g-key"
        assert config.cysic_api_key == "c-key"
        assert config.cysic_base_url == "https://cysic.example/api"
        assert config.system_prompt == "Be brief"
        assert config.strict_models is True
        assert config.upstream_max_retries == 2
        assert config.upstream_timeout == 30.0
        assert (config.host, config.port) == ("0.0.0.0", 9000)
        assert config.log_level == "DEBUG"
        assert config.cors_origins == ["http://a.test", "http://b.test"]

    def test_empty_keys_are_absent(self):
        """Test that blank keys count as not configured."""
        config = AppConfig.from_env({"GEMINI_API_KEY": "", "CYSIC_API_KEY": ""})

        assert config.gemini_api_key is None
        assert config.cysic_api_key is None

    def test_keys_hidden_from_repr(self):
        """Test that credentials never appear in repr."""
        config = AppConfig(gemini_api_key="secret-g", cysic_api_key="secret-c")

        assert "secret" not in repr(config)

    @pytest.mark.parametrize(
        "env",
        [
            {"DUOCHAT_PORT": "not-a-port"},
            {"DUOCHAT_PORT": "70000"},
            {"DUOCHAT_UPSTREAM_MAX_RETRIES": "-1"},
            {"DUOCHAT_UPSTREAM_TIMEOUT": "0"},
        ],
    )
    def test_invalid_values_rejected(self, env):
        """Test that bad numbers fail loudly."""
        with pytest.raises(ValueError):
            AppConfig.from_env(env)

    def test_config_is_frozen(self):
        """Test that configuration cannot be changed after creation."""
        config = AppConfig()

        with pytest.raises(ValidationError):
            config.port = 1234  # type: ignore


class TestLogging:
    """Tests for setup_logging."""

    def test_setup_replaces_handlers(self):
        """Test that repeated setup leaves a single handler."""
        setup_logging("DEBUG")
        setup_logging("WARNING")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_defaults_to_info(self):
        """Test that a bad level name falls back to INFO."""
        setup_logging("chatty")

        assert logging.getLogger().level == logging.INFO
