"""Exception handlers turning failures into error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.errors import ShortenerError
from .middleware.headers import CORS_HEADERS

logger = logging.getLogger("shortlink.web")

FALLBACK_TEXT = "URL Shortener API - Use /api/shorten to create short URLs"


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _error_response(request: Request, status_code: int, message: str):
    if _is_api_request(request):
        return JSONResponse({"error": message}, status_code=status_code)
    return PlainTextResponse(message, status_code=status_code)


async def shortener_error_handler(request: Request, exc: ShortenerError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} in {request.url.path}: {exc.message}")
    return _error_response(request, exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Invalid request to {request.url.path}: {problems}")
    return _error_response(request, 400, f"Invalid request: {problems}")


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = str(exc.detail)
    # Routing misses carry Starlette's default detail
    if exc.status_code == 404 and message == "Not Found":
        message = "API endpoint not found" if _is_api_request(request) else FALLBACK_TEXT
    return _error_response(request, exc.status_code, message)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error in {request.url.path}: {exc}", exc_info=exc)
    response = _error_response(request, 500, "Internal server error")
    # Runs outside the middleware stack, so CORS headers are added here
    response.headers.update(CORS_HEADERS)
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on an app."""
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
