"""FastAPI application factories for both deployment variants."""

from fastapi import FastAPI

from .api import api_router
from .web import web_router
from .bot import bot_router
from .errors import register_error_handlers
from .middleware.headers import CORSHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    qr_client=None,
) -> FastAPI:
    """Create the JSON API + landing page application.

    Args:
        service_instance: Shortener service instance
        config: Configuration instance
        qr_client: QR code client used by /api/qr

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shortlink",
        description="URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config
    app.state.qr_client = qr_client

    register_error_handlers(app)

    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app


def create_bot_app(
    service_instance,
    bot_instance,
    config,
) -> FastAPI:
    """Create the Telegram webhook application.

    Args:
        service_instance: Shortener service instance
        bot_instance: TelegramBot handling webhook updates
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shortlink bot",
        description="Telegram URL shortener bot",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.service = service_instance
    app.state.bot = bot_instance
    app.state.config = config

    register_error_handlers(app)

    app.add_middleware(LoggingMiddleware)

    app.include_router(bot_router, tags=["Bot"])

    return app
