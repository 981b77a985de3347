"""Telegram bot deployment routes."""

from .routes import router as bot_router

__all__ = ["bot_router"]
