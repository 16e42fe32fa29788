"""Application configuration.

All process-wide settings are read once from the environment into an
immutable AppConfig, which is then passed explicitly to the adapters and the
app factory. Call ``load_dotenv()`` before ``AppConfig.from_env()`` to pick up
a local ``.env`` file.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from .llm.providers.cysic import DEFAULT_BASE_URL

DEFAULT_SYSTEM_PROMPT = "You are a helpful AI assistant"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_list(value: str | None, default: list[str]) -> list[str]:
    if value is None or not value.strip():
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


class AppConfig(BaseModel):
    """Settings shared by the server, adapters and CLI."""

    model_config = ConfigDict(frozen=True)

    # Credentials
    gemini_api_key: str | None = Field(default=None, repr=False)
    cysic_api_key: str | None = Field(default=None, repr=False)

    # Upstream
    cysic_base_url: str = DEFAULT_BASE_URL
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    strict_models: bool = False
    upstream_max_retries: int = Field(default=0, ge=0)
    upstream_timeout: float | None = Field(default=None, gt=0)

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Populated AppConfig

        Raises:
            ValueError: If a numeric variable cannot be parsed

        Environment variables:
            GEMINI_API_KEY: Gemini API key
            CYSIC_API_KEY: Cysic API key (requests may supply their own)
            CYSIC_BASE_URL: Cysic API base URL
            DUOCHAT_SYSTEM_PROMPT: System preamble sent to Cysic
            DUOCHAT_STRICT_MODELS: Reject model ids missing from the catalog
            DUOCHAT_UPSTREAM_MAX_RETRIES: Retries on 429/5xx (default: 0)
            DUOCHAT_UPSTREAM_TIMEOUT: Upstream timeout in seconds
            DUOCHAT_HOST / DUOCHAT_PORT: Bind address (default: 127.0.0.1:8000)
            DUOCHAT_LOG_LEVEL: Logging level (default: INFO)
            DUOCHAT_CORS_ORIGINS: Comma-separated allowed origins
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            gemini_api_key=env.get("GEMINI_API_KEY") or None,
            cysic_api_key=env.get("CYSIC_API_KEY") or None,
            cysic_base_url=env.get("CYSIC_BASE_URL") or defaults.cysic_base_url,
            system_prompt=env.get("DUOCHAT_SYSTEM_PROMPT") or defaults.system_prompt,
            strict_models=_parse_bool(env.get("DUOCHAT_STRICT_MODELS")),
            upstream_max_retries=int(env.get("DUOCHAT_UPSTREAM_MAX_RETRIES") or 0),
            upstream_timeout=_parse_optional_float(env.get("DUOCHAT_UPSTREAM_TIMEOUT")),
            host=env.get("DUOCHAT_HOST") or defaults.host,
            port=int(env.get("DUOCHAT_PORT") or defaults.port),
            log_level=(env.get("DUOCHAT_LOG_LEVEL") or defaults.log_level).upper(),
            cors_origins=_parse_list(env.get("DUOCHAT_CORS_ORIGINS"), defaults.cors_origins),
        )
