"""Request/response schemas for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import ChatMessage


class ChatRequest(BaseModel):
    """Body of ``POST /api/ai``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt: str = Field(min_length=1, description="New user prompt")
    model: str = Field(min_length=1, description="Model id; decides the provider")
    messages: list[ChatMessage] = Field(
        default_factory=list,
        description="Prior conversation, oldest first"
    )
    custom_api_key: str | None = Field(
        default=None,
        alias="customApiKey",
        description="Caller-supplied Cysic key, overrides the configured one"
    )


class ChatResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str


class ProviderModels(BaseModel):
    id: str
    label: str
    models: list[str]


class ModelsResponse(BaseModel):
    providers: list[ProviderModels]
