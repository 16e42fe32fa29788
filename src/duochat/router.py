"""Request routing between the two provider adapters.

Hides which adapter a model id is sent to and how the outbound message list
is assembled for each of them. The router holds no per-request state.
"""

import logging
from collections.abc import Iterable, Mapping

from .llm.base import LLMProvider
from .llm.catalog import PRIMARY_PROVIDER, SECONDARY_PROVIDER, provider_for_model
from .llm.models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)


class ChatRouter:
    """Dispatches a prompt plus history to the provider serving the model."""

    def __init__(
        self,
        providers: Mapping[str, LLMProvider],
        system_prompt: str,
        strict_models: bool = False,
    ) -> None:
        missing = {PRIMARY_PROVIDER, SECONDARY_PROVIDER} - set(providers)
        if missing:
            raise ValueError(f"Missing provider adapters: {', '.join(sorted(missing))}")
        self._providers = dict(providers)
        self._system_prompt = system_prompt
        self._strict_models = strict_models

    @property
    def providers(self) -> dict[str, LLMProvider]:
        return dict(self._providers)

    def select_provider(self, model: str) -> str:
        """Return the provider id for a model (see ``provider_for_model``)."""
        return provider_for_model(model, strict=self._strict_models)

    def build_messages(
        self,
        provider: str,
        history: Iterable[ChatMessage],
        prompt: str,
    ) -> list[ChatMessage]:
        """Assemble the outbound message list.

        Cysic gets the system preamble first; Gemini has no system role here.
        The new prompt is always the final user turn.
        """
        messages: list[ChatMessage] = []
        if provider == SECONDARY_PROVIDER:
            messages.append(ChatMessage(role="system", content=self._system_prompt))
        messages.extend(history)
        messages.append(ChatMessage(role="user", content=prompt))
        return messages

    async def dispatch(
        self,
        prompt: str,
        model: str,
        messages: Iterable[ChatMessage] = (),
        custom_api_key: str | None = None,
    ) -> LLMResponse:
        """Send one user turn to the matching provider.

        Args:
            prompt: New user prompt
            model: Requested model id
            messages: Prior conversation, oldest first
            custom_api_key: Caller-supplied key, forwarded to Cysic only

        Returns:
            The adapter's response

        Raises:
            ProviderError: Propagated from routing or the adapter
        """
        provider = self.select_provider(model)
        outbound = self.build_messages(provider, messages, prompt)
        logger.debug("Routing model=%s to provider=%s (%d messages)", model, provider, len(outbound))

        adapter = self._providers[provider]
        if provider == SECONDARY_PROVIDER:
            return await adapter.chat_completion(outbound, model=model, api_key=custom_api_key)
        return await adapter.chat_completion(outbound, model=model)

    async def close(self) -> None:
        """Close every adapter."""
        for adapter in self._providers.values():
            await adapter.close()
