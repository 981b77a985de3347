"""Telegram webhook handling."""

import logging
from typing import Any, Optional, Sequence

from ..service import URLShortenerService
from ..common.urls import build_short_url
from ..errors import ShortenerError
from .notifier import Notifier, InlineButton
from .updates import (
    InboundMessage,
    StartCommand,
    UrlMessage,
    TextMessage,
    classify_update,
)


WELCOME_TEXT = (
    "Welcome! I'm a URL shortener bot. "
    "Send me any long URL, and I'll shrink it for you!"
)
INVALID_URL_TEXT = (
    "That doesn't look like a valid URL. "
    "Please send a URL that starts with http:// or https://"
)
SUCCESS_TEXT = "Success! Here is your short URL:\n{short_url}"
FAILURE_TEXT = "Sorry, an unexpected error occurred. Please try again later."
REPOSITORY_BUTTON_TEXT = "⭐ View on GitHub"


class TelegramBot:
    """Turn webhook updates into shortener calls and chat replies."""

    def __init__(
        self,
        service: URLShortenerService,
        notifier: Notifier,
        repository_url: Optional[str] = None,
        welcome_media_url: Optional[str] = None,
        welcome_media_type: str = "animation",
        path_prefix: str = "",
        extra_buttons: Sequence[InlineButton] = (),
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize bot.

        Args:
            service: Shortener service
            notifier: Outbound chat sink
            repository_url: Link shown on the welcome message button
            welcome_media_url: Photo or animation sent for /start (text only if unset)
            welcome_media_type: 'photo' or 'animation'
            path_prefix: Path prefix for short URLs
            extra_buttons: Further welcome links, placed after the repository button
            logger: Optional logger
        """
        if welcome_media_type not in ("photo", "animation"):
            raise ValueError(f"Unsupported welcome media type: {welcome_media_type}")

        self.service = service
        self.notifier = notifier
        self.repository_url = repository_url
        self.welcome_media_url = welcome_media_url
        self.welcome_media_type = welcome_media_type
        self.path_prefix = path_prefix
        self.extra_buttons = list(extra_buttons)
        self.logger = logger or logging.getLogger(__name__)

    async def handle_update(self, payload: Any, base_url: str) -> InboundMessage:
        """Process one webhook delivery.

        Chat API failures are logged, not raised: the webhook must be
        acknowledged whatever happens here, otherwise Telegram re-delivers
        the update.

        Args:
            payload: Decoded webhook JSON
            base_url: Public base URL short links are built from

        Returns:
            The classified message (for logging and tests)
        """
        message = classify_update(payload)

        try:
            if isinstance(message, StartCommand):
                await self.send_welcome(message.chat_id)
            elif isinstance(message, UrlMessage):
                await self.shorten_and_reply(message.chat_id, message.url, base_url)
            elif isinstance(message, TextMessage):
                await self.notifier.send_message(message.chat_id, INVALID_URL_TEXT)
            else:
                self.logger.debug(f"Ignoring update: {message.reason}")
        except ShortenerError as e:
            self.logger.error(f"Failed to answer {type(message).__name__}: {e.message}")

        return message

    async def send_welcome(self, chat_id) -> None:
        buttons = []
        if self.repository_url:
            buttons.append(InlineButton(REPOSITORY_BUTTON_TEXT, self.repository_url))
        buttons.extend(self.extra_buttons)

        if not self.welcome_media_url:
            await self.notifier.send_message(chat_id, WELCOME_TEXT, buttons=buttons)
        elif self.welcome_media_type == "photo":
            await self.notifier.send_photo(
                chat_id, self.welcome_media_url, caption=WELCOME_TEXT, buttons=buttons
            )
        else:
            await self.notifier.send_animation(
                chat_id, self.welcome_media_url, caption=WELCOME_TEXT, buttons=buttons
            )

    async def shorten_and_reply(self, chat_id, url: str, base_url: str) -> None:
        try:
            link = await self.service.shorten(url)
        except Exception as e:
            # Store failures land here too; the user gets a reply either way
            self.logger.error(f"Shortening failed for chat {chat_id}: {e}")
            await self.notifier.send_message(chat_id, FAILURE_TEXT)
            return

        short_url = build_short_url(link.code, base_url, self.path_prefix)
        await self.notifier.send_message(chat_id, SUCCESS_TEXT.format(short_url=short_url))
