from typing import TYPE_CHECKING, Any

from .base import LLMProvider
from .catalog import PRIMARY_PROVIDER, SECONDARY_PROVIDER
from .providers import CysicProvider, GeminiProvider

if TYPE_CHECKING:
    from ..config import AppConfig


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('gemini', 'cysic')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str | None
                - model: str (default: 'gemini-2.5-flash')
            For Cysic:
                - api_key: str | None (requests may supply their own)
                - model: str (default: 'QwQ-32B-Q4_K_M')
                - base_url: str (default: 'https://api-ai.cysic.xyz/api/ai')
                - max_retries: int (default: 0)
                - timeout: float | None

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-pro"
        ... )

        >>> provider = create_llm_provider("cysic", api_key=None)
    """
    provider_lower = provider.lower()

    if provider_lower == PRIMARY_PROVIDER:
        config.setdefault("api_key", None)
        return GeminiProvider(**config)

    if provider_lower == SECONDARY_PROVIDER:
        return CysicProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: '{PRIMARY_PROVIDER}', '{SECONDARY_PROVIDER}'"
    )


def build_providers(config: "AppConfig") -> dict[str, LLMProvider]:
    """Create both adapters from the application configuration."""
    return {
        PRIMARY_PROVIDER: create_llm_provider(
            PRIMARY_PROVIDER,
            api_key=config.gemini_api_key,
        ),
        SECONDARY_PROVIDER: create_llm_provider(
            SECONDARY_PROVIDER,
            api_key=config.cysic_api_key,
            base_url=config.cysic_base_url,
            max_retries=config.upstream_max_retries,
            timeout=config.upstream_timeout,
        ),
    }
