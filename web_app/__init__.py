"""Web application for the link shortener."""

from .app_factory import create_app, create_bot_app

__all__ = ["create_app", "create_bot_app"]
