"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import AppConfig
from ..llm.catalog import PROVIDER_LABELS, PROVIDER_MODELS
from ..llm.exceptions import ProviderError
from ..llm.factory import build_providers
from ..router import ChatRouter
from .errors import register_exception_handlers
from .schemas import ChatRequest, ChatResponse, ErrorResponse, ModelsResponse, ProviderModels

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api", tags=["chat"])


def get_chat_router(request: Request) -> ChatRouter:
    return request.app.state.chat_router


@api_router.post(
    "/ai",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask(payload: ChatRequest, chat_router: ChatRouter = Depends(get_chat_router)) -> ChatResponse:
    """Forward one user turn, with its history, to the provider serving the model."""
    try:
        response = await chat_router.dispatch(
            prompt=payload.prompt,
            model=payload.model,
            messages=payload.messages,
            custom_api_key=payload.custom_api_key,
        )
    except ProviderError:
        raise
    except Exception as e:
        logger.error("API error: %s", e, exc_info=True)
        raise ProviderError(str(e) or "Something went wrong") from e

    return ChatResponse(text=response.content)


@api_router.get("/models", response_model=ModelsResponse)
async def list_models() -> ModelsResponse:
    """List the providers and the model ids each one serves."""
    return ModelsResponse(
        providers=[
            ProviderModels(id=provider, label=PROVIDER_LABELS[provider], models=list(models))
            for provider, models in PROVIDER_MODELS.items()
        ]
    )


def create_app(config: AppConfig | None = None, chat_router: ChatRouter | None = None) -> FastAPI:
    """Build the API application.

    Args:
        config: Application configuration (default: read from environment)
        chat_router: Pre-built router, mainly for tests; built from config otherwise

    Returns:
        Configured FastAPI app
    """
    config = config or AppConfig.from_env()
    router = chat_router or ChatRouter(
        build_providers(config),
        system_prompt=config.system_prompt,
        strict_models=config.strict_models,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await router.close()

    app = FastAPI(
        title="duochat",
        description="Routes chat prompts to Gemini or Cysic",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.chat_router = router

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app
