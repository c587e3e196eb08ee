"""
API handlers: map service errors to HTTP.

Responsibility: exception-to-HTTP mapping with the {"error", "details"} body.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import InvalidRequestError, UpstreamError

logger = logging.getLogger(__name__)

UPSTREAM_FAILED = "Failed to communicate with the AI model."
INVALID_BODY = "Invalid request body."


async def handle_invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body that is not a JSON object of the expected shape: 400 rather than FastAPI's 422."""
    logger.info("[api:validation] %s %s errors=%d", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": INVALID_BODY})


async def handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.warning("[api:upstream] %s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"error": UPSTREAM_FAILED, "details": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidRequestError, handle_invalid_request)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(UpstreamError, handle_upstream_error)
