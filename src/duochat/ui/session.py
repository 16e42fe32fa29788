"""Chat session state, independent of any widget.

Hides the rules of the chat page: which provider/model is active, when a
provider switch needs confirmation, when a prompt may be sent, and how the
conversation grows on success and failure.
"""

from collections.abc import Callable
from typing import Any

import httpx

from ..llm.catalog import PRIMARY_PROVIDER, PROVIDER_MODELS, SECONDARY_PROVIDER, default_model
from .client import RelayClient
from .config import (
    API_KEY_MODE_CUSTOM,
    API_KEY_MODE_DEFAULT,
    EMPTY_REPLY,
    FALLBACK_REPLY,
    MISSING_CUSTOM_KEY,
)
from .models import Message

# Providers that must be confirmed before switching to them
CONFIRM_PROVIDERS = frozenset({SECONDARY_PROVIDER})


class MissingApiKeyError(ValueError):
    """Custom-key mode is on but no key was entered."""


class ChatSession:
    """Conversation plus provider/model selection for one chat window.

    At most one request is in flight at a time; ``loading`` is the guard.
    """

    def __init__(
        self,
        client: RelayClient,
        on_message: Callable[[Message], None] | None = None,
        on_loading: Callable[[bool], None] | None = None,
    ) -> None:
        self._client = client
        self.on_message = on_message
        self.on_loading = on_loading

        self.provider = PRIMARY_PROVIDER
        self.model = default_model(PRIMARY_PROVIDER)
        self.pending_provider: str | None = None
        self.api_key_mode = API_KEY_MODE_DEFAULT
        self.custom_api_key = ""
        self._messages: list[Message] = []
        self._loading = False

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def models(self) -> tuple[str, ...]:
        """Model ids of the active provider."""
        return PROVIDER_MODELS[self.provider]

    def _set_loading(self, value: bool) -> None:
        self._loading = value
        if self.on_loading is not None:
            self.on_loading(value)

    def _append(self, message: Message) -> None:
        self._messages.append(message)
        if self.on_message is not None:
            self.on_message(message)

    def _apply_provider(self, provider: str) -> None:
        self.provider = provider
        self.model = default_model(provider)

    def request_provider_change(self, provider: str) -> bool:
        """Ask to switch provider.

        Returns:
            True if the switch waits for ``confirm_provider_change``

        Raises:
            ValueError: If the provider is unknown
        """
        if provider not in PROVIDER_MODELS:
            raise ValueError(f"Unknown provider: {provider}")
        if provider == self.provider:
            self.pending_provider = None
            return False
        if provider in CONFIRM_PROVIDERS:
            self.pending_provider = provider
            return True
        self.pending_provider = None
        self._apply_provider(provider)
        return False

    def confirm_provider_change(self) -> None:
        """Apply the pending provider switch, if any."""
        if self.pending_provider is not None:
            self._apply_provider(self.pending_provider)
            self.pending_provider = None

    def cancel_provider_change(self) -> None:
        """Drop the pending switch; the active provider stays as it was."""
        self.pending_provider = None

    def select_model(self, model: str) -> None:
        """Select a model of the active provider.

        Raises:
            ValueError: If the active provider does not serve the model
        """
        if model not in self.models:
            raise ValueError(f"Model {model} is not offered by {self.provider}")
        self.model = model

    def set_api_key_mode(self, mode: str, custom_api_key: str | None = None) -> None:
        if mode not in (API_KEY_MODE_DEFAULT, API_KEY_MODE_CUSTOM):
            raise ValueError(f"Unknown API key mode: {mode}")
        self.api_key_mode = mode
        if custom_api_key is not None:
            self.custom_api_key = custom_api_key

    @property
    def uses_custom_key(self) -> bool:
        return self.provider == SECONDARY_PROVIDER and self.api_key_mode == API_KEY_MODE_CUSTOM

    def build_payload(self, prompt: str, history: list[Message]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "prompt": prompt,
            "model": self.model,
            "messages": [message.to_history() for message in history],
        }
        if self.uses_custom_key:
            payload["customApiKey"] = self.custom_api_key
        return payload

    async def submit(self, prompt: str) -> Message | None:
        """Send a prompt and record the reply.

        Args:
            prompt: Text typed by the user

        Returns:
            The assistant message appended, or None if nothing was sent
            (blank prompt, or a request already in flight)

        Raises:
            MissingApiKeyError: Custom-key mode without a key; nothing is sent
        """
        if not prompt.strip() or self._loading:
            return None
        if self.uses_custom_key and not self.custom_api_key.strip():
            raise MissingApiKeyError(MISSING_CUSTOM_KEY)

        model = self.model
        history = list(self._messages)
        payload = self.build_payload(prompt, history)

        self._append(Message(role="user", content=prompt))
        self._set_loading(True)
        try:
            try:
                data = await self._client.ask(payload)
            except (httpx.HTTPError, ValueError):
                reply = Message(role="assistant", content=FALLBACK_REPLY, model=model)
            else:
                if not isinstance(data, dict):
                    data = {}
                content = data.get("text") or data.get("response") or EMPTY_REPLY
                reply = Message(role="assistant", content=content, model=model)
            self._append(reply)
            return reply
        finally:
            self._set_loading(False)

    def clear(self) -> None:
        """Forget the conversation (not allowed while a request is in flight)."""
        if not self._loading:
            self._messages.clear()
