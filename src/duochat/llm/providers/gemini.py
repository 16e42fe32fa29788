"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async chat completions.
Reference: https://github.com/googleapis/python-genai

A single message is sent as one-shot content generation; longer
conversations open a chat seeded with the earlier turns and send the last
one as the new turn.
"""

import logging
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider
from ..catalog import PRIMARY_PROVIDER
from ..exceptions import ProviderError
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to get response from Gemini"


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization (deferred until first request)
    - Single-shot vs. multi-turn call shape
    - Role mapping ('user' stays, everything else becomes 'model')
    - Collapsing every failure into one generic ProviderError
    """

    name = PRIMARY_PROVIDER

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        client: Any | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key (the SDK rejects a missing key on first use)
            model: Default model (gemini-2.5-flash, gemini-2.5-pro)
            client: Pre-built genai.Client, mainly for tests
            **client_kwargs: Additional kwargs for Client
        """
        self._api_key = api_key
        self._model = model
        self._client = client
        self._client_kwargs = client_kwargs

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key, **self._client_kwargs)
        return self._client

    @staticmethod
    def _to_history(messages: list[ChatMessage]) -> list[types.Content]:
        """Convert earlier turns to Gemini chat history."""
        return [
            types.Content(
                role="user" if msg.role == "user" else "model",
                parts=[types.Part(text=msg.content)]
            )
            for msg in messages
        ]

    @staticmethod
    def _extract_content(response: Any) -> str:
        """Extract text content from a Gemini response.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Text content or empty string
        """
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    @staticmethod
    def _extract_usage(response: Any) -> dict[str, int] | None:
        metadata = getattr(response, "usage_metadata", None)
        if not metadata:
            return None
        return {
            "prompt_tokens": metadata.prompt_token_count or 0,
            "completion_tokens": metadata.candidates_token_count or 0,
            "total_tokens": metadata.total_token_count or 0,
        }

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Google Gemini.

        Args:
            messages: Conversation history ending with the new user turn
            model: Model to use (overrides default)
            **kwargs: Ignored; accepted for interface compatibility

        Returns:
            LLMResponse with generated content

        Raises:
            ValueError: If messages is empty
            ProviderError: On any SDK or network failure
        """
        if not messages:
            raise ValueError("At least one message is required")

        model_to_use = model or self._model

        try:
            client = self._get_client()
            if len(messages) == 1:
                response = await client.aio.models.generate_content(
                    model=model_to_use,
                    contents=messages[0].content
                )
            else:
                chat = client.aio.chats.create(
                    model=model_to_use,
                    history=self._to_history(messages[:-1])
                )
                response = await chat.send_message(messages[-1].content)
        except Exception as e:
            logger.error("Gemini API error: %s", e, exc_info=True)
            raise ProviderError(FAILURE_MESSAGE) from e

        return LLMResponse(
            content=self._extract_content(response),
            model=model_to_use,
            provider=self.name,
            usage=self._extract_usage(response)
        )

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
