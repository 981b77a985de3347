"""Outbound chat notifications via the Telegram Bot API."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

import httpx

from ..errors import UpstreamFailureError


TELEGRAM_API_URL = "https://api.telegram.org"

ChatId = Union[int, str]


@dataclass(frozen=True)
class InlineButton:
    """Inline keyboard button opening a link."""

    text: str
    url: str


class Notifier(ABC):
    """Sink for messages sent to a chat."""

    @abstractmethod
    async def send_message(
        self, chat_id: ChatId, text: str, buttons: Sequence[InlineButton] = ()
    ) -> None:
        pass

    @abstractmethod
    async def send_photo(
        self,
        chat_id: ChatId,
        photo: str,
        caption: Optional[str] = None,
        buttons: Sequence[InlineButton] = (),
    ) -> None:
        pass

    @abstractmethod
    async def send_animation(
        self,
        chat_id: ChatId,
        animation: str,
        caption: Optional[str] = None,
        buttons: Sequence[InlineButton] = (),
    ) -> None:
        pass

    async def close(self) -> None:
        pass


class TelegramNotifier(Notifier):
    """Notifier backed by the Telegram Bot API."""

    def __init__(
        self,
        bot_token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        api_url: str = TELEGRAM_API_URL,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Telegram notifier.

        Args:
            bot_token: Bot token issued by BotFather
            http_client: Shared async HTTP client (one is created if omitted)
            api_url: Bot API root
            timeout_seconds: Timeout for each API call
            logger: Optional logger instance
        """
        if not bot_token:
            raise ValueError("A Telegram bot token is required")
        self.bot_token = bot_token
        self.api_url = api_url.rstrip("/")
        self.client = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self.logger = logger or logging.getLogger(__name__)

    def _method_url(self, method: str) -> str:
        return f"{self.api_url}/bot{self.bot_token}/{method}"

    async def call(self, method: str, payload: Dict[str, Any]) -> Any:
        """Call a Bot API method.

        Args:
            method: API method name (e.g. sendMessage)
            payload: JSON body

        Returns:
            The ``result`` field of the API response

        Raises:
            UpstreamFailureError: If the API is unreachable or rejects the call
        """
        try:
            response = await self.client.post(self._method_url(method), json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            # Log the method only, the URL carries the bot token
            self.logger.error(f"Telegram {method} failed: {type(e).__name__}")
            raise UpstreamFailureError(f"Telegram {method} failed") from e

        if not body.get("ok"):
            description = body.get("description", "unknown error")
            self.logger.error(f"Telegram {method} rejected: {description}")
            raise UpstreamFailureError(f"Telegram {method} rejected: {description}")

        return body.get("result")

    @staticmethod
    def _with_buttons(payload: Dict[str, Any], buttons: Sequence[InlineButton]) -> Dict[str, Any]:
        # All buttons share one keyboard row
        if buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [[{"text": b.text, "url": b.url} for b in buttons]],
            }
        return payload

    async def send_message(
        self, chat_id: ChatId, text: str, buttons: Sequence[InlineButton] = ()
    ) -> None:
        payload = self._with_buttons({"chat_id": chat_id, "text": text}, buttons)
        await self.call("sendMessage", payload)

    async def send_photo(
        self,
        chat_id: ChatId,
        photo: str,
        caption: Optional[str] = None,
        buttons: Sequence[InlineButton] = (),
    ) -> None:
        payload: Dict[str, Any] = {"chat_id": chat_id, "photo": photo}
        if caption:
            payload["caption"] = caption
        await self.call("sendPhoto", self._with_buttons(payload, buttons))

    async def send_animation(
        self,
        chat_id: ChatId,
        animation: str,
        caption: Optional[str] = None,
        buttons: Sequence[InlineButton] = (),
    ) -> None:
        payload: Dict[str, Any] = {"chat_id": chat_id, "animation": animation}
        if caption:
            payload["caption"] = caption
        await self.call("sendAnimation", self._with_buttons(payload, buttons))

    async def set_webhook(self, url: str) -> None:
        """Point the bot's webhook at ``url``."""
        await self.call("setWebhook", {"url": url})

    async def delete_webhook(self) -> None:
        await self.call("deleteWebhook", {})

    async def close(self) -> None:
        await self.client.aclose()
