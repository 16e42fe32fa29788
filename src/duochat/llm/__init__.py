from .base import LLMProvider
from .catalog import (
    PRIMARY_PROVIDER,
    PROVIDER_LABELS,
    PROVIDER_MODELS,
    SECONDARY_PROVIDER,
    default_model,
    provider_for_model,
)
from .exceptions import (
    MissingCredentialError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderPermissionError,
    ProviderRateLimitError,
    ProviderRequestError,
    ProviderServerError,
    UnsupportedModelError,
)
from .factory import build_providers, create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import CysicProvider, GeminiProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "build_providers",
    "ChatMessage",
    "LLMResponse",
    "CysicProvider",
    "GeminiProvider",
    "PRIMARY_PROVIDER",
    "SECONDARY_PROVIDER",
    "PROVIDER_LABELS",
    "PROVIDER_MODELS",
    "default_model",
    "provider_for_model",
    "MissingCredentialError",
    "ProviderAuthenticationError",
    "ProviderError",
    "ProviderPermissionError",
    "ProviderRateLimitError",
    "ProviderRequestError",
    "ProviderServerError",
    "UnsupportedModelError",
]
