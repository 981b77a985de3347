"""Common utilities for the link shortener."""

from .validators import is_valid_url
from .urls import forwarded_origin, resolve_base_url, build_short_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "forwarded_origin",
    "resolve_base_url",
    "build_short_url",
    "setup_logging",
]
