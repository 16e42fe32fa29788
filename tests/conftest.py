"""Pytest configuration and shared fixtures."""
import json
import os
from typing import Any

import httpx
import pytest

from duochat.config import AppConfig
from duochat.llm.base import LLMProvider
from duochat.llm.catalog import PRIMARY_PROVIDER, SECONDARY_PROVIDER
from duochat.llm.models import ChatMessage, LLMResponse


class FakeProvider(LLMProvider):
    """In-memory adapter that records every call."""

    def __init__(self, name: str, reply: str = "fake reply") -> None:
        self.name = name
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({"messages": list(messages), "model": model, **kwargs})
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=model or self.model, provider=self.name)

    async def close(self) -> None:
        self.closed = True


class RecordingTransport:
    """httpx MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, payload: Any = None, error: Exception | None = None):
        self.status_code = status_code
        self.payload = payload
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "cysic": os.getenv("CYSIC_API_KEY"),
    }


@pytest.fixture
def app_config():
    """Configuration with fake credentials."""
    return AppConfig(gemini_api_key="gemini-test-key", cysic_api_key="cysic-test-key")


@pytest.fixture
def fake_providers():
    """One recording adapter per provider."""
    return {
        PRIMARY_PROVIDER: FakeProvider(PRIMARY_PROVIDER, reply="gemini says hi"),
        SECONDARY_PROVIDER: FakeProvider(SECONDARY_PROVIDER, reply="cysic says hi"),
    }


@pytest.fixture
def completion_payload():
    """Minimal OpenAI-style chat completion body."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "phi-4",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hello from Cysic"},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 4, "total_tokens": 16},
    }
