"""Business logic service for the link shortener."""

import logging
import uuid
from typing import Optional, Dict, List

from .shortcode import ShortCodeGenerator
from .database.base import KeyValueStore
from .database.models import ShortLink
from .common.validators import is_valid_url
from .errors import InvalidInputError, NotFoundError, ExhaustedRetriesError


class URLShortenerService:
    """Service layer for shortening and resolving URLs."""

    def __init__(
        self,
        store: KeyValueStore,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 10,
        track_clicks: bool = True,
    ):
        """Initialize URL shortener service.

        Args:
            store: Key-value store holding one record per short code
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Maximum code generation attempts per shorten call
            track_clicks: Whether successful resolutions increment the click counter
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.track_clicks = track_clicks

    async def shorten(self, original_url: Optional[str]) -> ShortLink:
        """Create a new short link.

        Args:
            original_url: The original long URL, stored exactly as given

        Returns:
            The stored ShortLink

        Raises:
            InvalidInputError: If the URL is missing or not an http(s) URL
            ExhaustedRetriesError: If no free code was found within the retry bound
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidInputError(error)

        link_id = str(uuid.uuid4())

        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate_random()

            if await self.store.exists(code):
                self.logger.debug(f"Short code collision on attempt {attempt}: {code}")
                continue

            link = ShortLink(code=code, original_url=original_url, id=link_id)

            # Another request may have taken the code since the check above
            if not await self.store.put(code, link.to_store_value(), only_if_absent=True):
                self.logger.debug(f"Short code taken concurrently on attempt {attempt}: {code}")
                continue

            self.logger.info(f"Created short URL: {code} -> {original_url}")
            return link

        self.logger.error(
            f"Unable to generate unique short code after {self.max_collision_retries} attempts"
        )
        raise ExhaustedRetriesError()

    async def resolve(self, short_code: str, count_click: bool = True) -> str:
        """Get the original URL for a short code.

        Args:
            short_code: The short code to lookup
            count_click: Whether this lookup counts as a click

        Returns:
            Original URL

        Raises:
            NotFoundError: If the code is unknown
        """
        link = await self.get_link(short_code)

        if count_click and self.track_clicks:
            # Counted against the latest stored value, never a stale copy
            def add_click(value: str) -> str:
                current = ShortLink.from_store_value(short_code, value)
                current.clicks += 1
                return current.to_store_value()

            await self.store.update(short_code, add_click)

        self.logger.debug(f"Resolved URL: {short_code} -> {link.original_url}")
        return link.original_url

    async def get_link(self, short_code: str) -> ShortLink:
        """Get the stored record for a short code without counting a click.

        Raises:
            NotFoundError: If the code is unknown
        """
        value = None
        if self.generator.is_valid_format(short_code):
            value = await self.store.get(short_code)

        if value is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError()

        return ShortLink.from_store_value(short_code, value)

    async def list_links(self) -> List[ShortLink]:
        """List every stored link, oldest first."""
        links = []
        for code in await self.store.keys():
            value = await self.store.get(code)
            # Keys can disappear between listing and reading on a shared store
            if value is not None:
                links.append(ShortLink.from_store_value(code, value))
        links.sort(key=lambda link: link.created_at)
        return links

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.health_check()
        return {
            "store": store_healthy,
            "overall": store_healthy,
        }

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
