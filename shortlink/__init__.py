"""Core business logic for the link shortener."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService

__all__ = ["ShortCodeGenerator", "URLShortenerService"]
