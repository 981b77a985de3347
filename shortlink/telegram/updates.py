"""Inbound Telegram webhook updates.

Only the fields the bot reads are modelled; everything else in the update is
ignored. ``classify_update`` turns a raw payload into one of a fixed set of
message kinds so handlers never dig into the JSON directly.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from ..common.validators import is_valid_url


START_COMMAND = "/start"


class Chat(BaseModel):
    id: Union[int, str]

    model_config = {"extra": "ignore"}


class Message(BaseModel):
    chat: Chat
    text: Optional[str] = None

    model_config = {"extra": "ignore"}


class Update(BaseModel):
    update_id: Optional[int] = None
    message: Optional[Message] = None

    model_config = {"extra": "ignore"}


@dataclass(frozen=True)
class StartCommand:
    chat_id: Union[int, str]


@dataclass(frozen=True)
class UrlMessage:
    chat_id: Union[int, str]
    url: str


@dataclass(frozen=True)
class TextMessage:
    chat_id: Union[int, str]
    text: str


@dataclass(frozen=True)
class Unrecognized:
    reason: str = ""


InboundMessage = Union[StartCommand, UrlMessage, TextMessage, Unrecognized]


def classify_update(payload: Any) -> InboundMessage:
    """Classify a raw webhook payload.

    Args:
        payload: Decoded JSON body of the webhook request

    Returns:
        The message kind; ``Unrecognized`` for anything without message text
    """
    try:
        update = Update.model_validate(payload)
    except ValidationError:
        return Unrecognized("malformed update")

    message = update.message
    if message is None:
        return Unrecognized("no message")
    if not message.text:
        return Unrecognized("no text")

    chat_id = message.chat.id
    text = message.text

    if text == START_COMMAND:
        return StartCommand(chat_id)

    is_valid, _ = is_valid_url(text)
    if is_valid:
        return UrlMessage(chat_id, text)

    return TextMessage(chat_id, text)
