"""Exception handlers for the HTTP API.

Every failure leaves the API as ``{"error": <message>}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..llm.exceptions import ProviderError

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing prompt or model"
REQUIRED_FIELDS = {"prompt", "model"}
# Absent or empty values; wrong types are reported as invalid
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())[1:])
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


def _is_missing(error: dict) -> bool:
    return error.get("type") in MISSING_ERROR_TYPES or error.get("input", "") is None


def validation_message(errors: list[dict]) -> str:
    """Build the client-facing message for schema violations."""
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if len(loc) == 2 and loc[0] == "body" and loc[1] in REQUIRED_FIELDS and _is_missing(error):
            return MISSING_FIELDS_MESSAGE
        if loc == ("body",) and error.get("type") == "missing":
            return MISSING_FIELDS_MESSAGE
    return "Invalid request body: " + "; ".join(_describe(error) for error in errors)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies."""
    return JSONResponse(
        status_code=400,
        content={"error": validation_message(list(exc.errors()))},
    )


async def provider_exception_handler(request: Request, exc: ProviderError) -> JSONResponse:
    """Handle adapter and routing failures."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ProviderError, provider_exception_handler)
