"""Static provider/model catalog.

Hides which model ids each provider serves and the rule that decides which
adapter a model id is routed to.
"""

from .exceptions import UnsupportedModelError

PRIMARY_PROVIDER = "gemini"
SECONDARY_PROVIDER = "cysic"

# Ordered: the first model of each provider is its default
PROVIDER_MODELS: dict[str, tuple[str, ...]] = {
    PRIMARY_PROVIDER: ("gemini-2.5-flash", "gemini-2.5-pro"),
    SECONDARY_PROVIDER: (
        "QwQ-32B-Q4_K_M",
        "Meta-Llama-3-8B-Instruct",
        "phi-4",
        "Llama-Guard-3-8B",
        "DeepSeek-R1-0528-Qwen3-8B",
        "gemma-2-9b-it",
    ),
}

PROVIDER_LABELS: dict[str, str] = {
    PRIMARY_PROVIDER: "Gemini",
    SECONDARY_PROVIDER: "Cysic",
}


def default_model(provider: str) -> str:
    """Return the default model for a provider.

    Raises:
        KeyError: If the provider is unknown
    """
    return PROVIDER_MODELS[provider][0]


def is_primary_model(model: str) -> bool:
    """Check whether a model id is served by the primary provider."""
    return model in PROVIDER_MODELS[PRIMARY_PROVIDER]


def provider_for_model(model: str, strict: bool = False) -> str:
    """Pick the provider a model id is routed to.

    Primary model ids go to the primary provider; anything else falls
    through to the secondary provider unless ``strict`` is set, in which
    case ids that no provider lists are rejected.

    Args:
        model: Model identifier from the request
        strict: Reject ids missing from the catalog

    Returns:
        Provider identifier

    Raises:
        UnsupportedModelError: In strict mode, for an unknown model id
    """
    if is_primary_model(model):
        return PRIMARY_PROVIDER
    if strict and model not in PROVIDER_MODELS[SECONDARY_PROVIDER]:
        raise UnsupportedModelError(model)
    return SECONDARY_PROVIDER
