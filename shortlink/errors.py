"""
Error classes for the link shortener.

Every failure a request can hit maps onto one of these, and each carries the
HTTP status it is reported with.
"""

from typing import Optional


class ShortenerError(Exception):
    """
    Base shortener error class.

    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Internal server error")
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        """
        Initialize shortener error.

        Args:
            message: Error message (overrides default)
        """
        self.message = message or self.message
        super().__init__(self.message)


class InvalidInputError(ShortenerError):
    """400 Missing or invalid URL."""
    status_code = 400
    message = "Invalid input"


class NotFoundError(ShortenerError):
    """404 Unknown short code."""
    status_code = 404
    message = "URL not found"


class MethodNotAllowedError(ShortenerError):
    """405 Method not allowed."""
    status_code = 405
    message = "Method Not Allowed"


class ExhaustedRetriesError(ShortenerError):
    """500 Could not find a free short code within the retry bound."""
    status_code = 500
    message = "Failed to generate unique short code"


class UpstreamFailureError(ShortenerError):
    """500 An external service (QR generator, chat API) failed."""
    status_code = 500
    message = "Upstream service failure"
