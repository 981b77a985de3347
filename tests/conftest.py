"""Pytest configuration and fixtures."""

import pytest

from shortlink.common.logging_config import setup_logging
from shortlink.config import Config
from shortlink.database.memory import MemoryStore
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator

from helpers import RecordingNotifier


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store():
    """Fresh in-memory store."""
    return MemoryStore()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(store, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """API configuration for tests."""
    return Config(mode="api", base_url="http://testserver")


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes#answer-1",
    ]
