#!/usr/bin/env python3
"""
Main entry point for the link shortener service.

One process serves one deployment variant, picked by MODE:
    api - JSON API, landing page, 302 redirects, click counting
    bot - Telegram webhook, 301 redirects

Usage:
    python app.py

Environment variables:
    MODE - 'api' (default) or 'bot'
    STORE_BACKEND - 'memory' (default) or 'redis'
    REDIS_URL - Redis connection URL (required for the redis store)
    BASE_URL - Base URL for short links
    TELEGRAM_BOT_TOKEN - Bot token (bot mode)
    REPOSITORY_URL - Project repository link (bot mode)
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI

from shortlink.config import load_config
from shortlink.database import create_store
from shortlink.qr import QRCodeClient
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.telegram import TelegramBot, TelegramNotifier
from shortlink.common.logging_config import setup_logging
from web_app import create_app, create_bot_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting link shortener service in {config.mode} mode...")

    store = create_store(config.store_backend, redis_url=config.redis_url, logger=logger)
    await store.connect()
    logger.info(f"Using {config.store_backend} store")

    generator = ShortCodeGenerator(default_length=config.code_length)
    service = URLShortenerService(
        store=store,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        track_clicks=config.clicks_enabled,
    )
    app.state.service = service

    # One outbound client shared by the QR service and the Telegram API
    http_client = httpx.AsyncClient(timeout=config.http_timeout_seconds)

    if config.mode == "bot":
        notifier = TelegramNotifier(
            bot_token=config.telegram_bot_token,
            http_client=http_client,
            logger=logger,
        )
        app.state.bot = TelegramBot(
            service=service,
            notifier=notifier,
            repository_url=config.repository_url,
            welcome_media_url=config.welcome_media_url,
            welcome_media_type=config.welcome_media_type,
            path_prefix=config.path_prefix,
            extra_buttons=config.welcome_extra_buttons,
            logger=logger,
        )
    else:
        app.state.qr_client = QRCodeClient(
            service_url=config.qr_service_url,
            http_client=http_client,
            logger=logger,
        )

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down link shortener service...")
    await http_client.aclose()
    await service.close()
    logger.info("Service stopped")


def build_app(config, logger) -> FastAPI:
    """Create the app for the configured mode; services are wired in lifespan."""
    if config.mode == "bot":
        if not config.telegram_bot_token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required in bot mode")
        app = create_bot_app(service_instance=None, bot_instance=None, config=config)
    else:
        app = create_app(service_instance=None, config=config)

    app.state.config = config
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    try:
        app = build_app(config, logger)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    # workers > 1 runs independent processes; each gets its own memory store
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
