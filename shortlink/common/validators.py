"""Validation utilities for the link shortener."""

from urllib.parse import urlparse
from typing import Tuple


ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL to be shortened.

    The URL must be absolute and use exactly ``http`` or ``https``. Nothing is
    normalized: the caller stores the input as given.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    try:
        result = urlparse(url)
        # Port parsing is lazy, force it so bad ports are rejected here
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme not in ALLOWED_SCHEMES:
        return False, "URL must use http or https protocol"

    if not result.netloc or not result.hostname:
        return False, "URL must have a valid domain"

    return True, ""
