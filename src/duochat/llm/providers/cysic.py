"""Cysic AI provider implementation.

Cysic exposes an OpenAI-compatible completions endpoint, so requests go
through the OpenAI SDK pointed at the Cysic base URL.
"""

import logging
from typing import Any

from openai import APIError, APIStatusError, AsyncOpenAI

from ..base import LLMProvider
from ..catalog import SECONDARY_PROVIDER
from ..exceptions import (
    MissingCredentialError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderPermissionError,
    ProviderRateLimitError,
    ProviderRequestError,
    ProviderServerError,
)
from ..models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api-ai.cysic.xyz/api/ai"


def _error_detail(error: APIError) -> str:
    """Pick the most useful description of an upstream failure."""
    body = error.body
    if isinstance(body, dict):
        detail = body.get("message") or body.get("error")
        return str(detail) if detail else str(body)
    if body:
        return str(body)
    return error.message


def map_status_error(error: APIStatusError) -> ProviderError:
    """Translate an upstream HTTP status into a ProviderError."""
    status = error.status_code
    if status == 401:
        return ProviderAuthenticationError("Cysic API authentication failed. Please check your API key.")
    if status == 403:
        return ProviderPermissionError("Cysic API access forbidden. Please check your API key permissions.")
    if status == 429:
        return ProviderRateLimitError("Cysic API rate limit exceeded. Please try again later.")
    if status >= 500:
        return ProviderServerError("Cysic API server error. Please try again later.")
    return ProviderRequestError(f"Cysic API request failed: {_error_detail(error)}")


class CysicProvider(LLMProvider):
    """Cysic LLM provider implementation using its OpenAI-compatible API.

    Hidden design decisions:
    - Credential resolution (per-request key wins over the configured one)
    - API client initialization (via OpenAI SDK, created on first use)
    - Status-code based error mapping
    - Retries disabled unless explicitly configured
    """

    name = SECONDARY_PROVIDER

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "QwQ-32B-Q4_K_M",
        base_url: str = DEFAULT_BASE_URL,
        max_retries: int = 0,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize Cysic provider.

        Args:
            api_key: Process-wide Cysic API key, may be absent
            model: Default model to use
            base_url: API base URL; requests go to {base_url}/chat/completions
            max_retries: SDK retries on 429/5xx with jittered backoff (default 0)
            timeout: Request timeout in seconds (None keeps the transport default)
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._api_key = api_key or None
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._max_retries = max_retries
        self._timeout = timeout
        self._client_kwargs = client_kwargs
        self._client: AsyncOpenAI | None = None

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def url(self) -> str:
        """Full completions endpoint URL."""
        return f"{self._base_url}/chat/completions"

    def resolve_api_key(self, custom_api_key: str | None = None) -> str:
        """Return the key for this call, caller-supplied first.

        Raises:
            MissingCredentialError: If neither key is available
        """
        api_key = (custom_api_key or "").strip() or self._api_key
        if not api_key:
            logger.error("Cysic API Error: No API key provided")
            raise MissingCredentialError(
                "Cysic API key is missing. Please check your environment "
                "variables or provide a custom API key."
            )
        return api_key

    def _client_for(self, api_key: str) -> AsyncOpenAI:
        if self._client is None:
            options: dict[str, Any] = dict(self._client_kwargs)
            if self._timeout is not None:
                options["timeout"] = self._timeout
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=self._base_url,
                max_retries=self._max_retries,
                **options
            )
        if self._client.api_key == api_key:
            return self._client
        return self._client.with_options(api_key=api_key)

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        api_key: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Cysic.

        Args:
            messages: Full outbound list, system preamble included
            model: Model to use (overrides default)
            api_key: Caller-supplied key, takes precedence over the configured one
            **kwargs: Additional completion parameters

        Returns:
            LLMResponse with generated content

        Raises:
            MissingCredentialError: Before any network call, if no key is available
            ProviderError: Mapped upstream or transport failure
        """
        resolved_key = self.resolve_api_key(api_key)
        model_to_use = model or self._model
        client = self._client_for(resolved_key)

        cysic_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        logger.info(
            "Making request to Cysic API: url=%s model=%s message_count=%d",
            self.url, model_to_use, len(cysic_messages)
        )
        try:
            completion = await client.chat.completions.create(
                model=model_to_use,
                messages=cysic_messages,
                **kwargs
            )
        except APIStatusError as e:
            logger.error(
                "Cysic API Error Details: status=%s data=%s url=%s has_api_key=%s",
                e.status_code, e.body, self.url, bool(resolved_key)
            )
            raise map_status_error(e) from e
        except APIError as e:
            logger.error("Cysic API Error Details: message=%s url=%s", e.message, self.url)
            raise ProviderRequestError(f"Cysic API request failed: {e.message}") from e

        logger.info("Cysic API response received")

        try:
            content = completion.choices[0].message.content or ""
        except (IndexError, AttributeError, TypeError) as e:
            logger.error("Cysic API returned no message: %s url=%s", e, self.url)
            raise ProviderRequestError(f"Cysic API request failed: {e}") from e

        usage = None
        if getattr(completion, "usage", None):
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens or 0,
                "completion_tokens": completion.usage.completion_tokens or 0,
                "total_tokens": completion.usage.total_tokens or 0
            }

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or model_to_use,
            provider=self.name,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Cysic client.

        Note: Uses the OpenAI SDK's async client close for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        if self._client is not None:
            await self._client.close()
            self._client = None
