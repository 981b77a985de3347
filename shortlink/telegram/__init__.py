"""Telegram bot front end for the link shortener."""

from .notifier import Notifier, TelegramNotifier, InlineButton
from .updates import (
    InboundMessage,
    StartCommand,
    UrlMessage,
    TextMessage,
    Unrecognized,
    classify_update,
)
from .bot import TelegramBot

__all__ = [
    "Notifier",
    "TelegramNotifier",
    "InlineButton",
    "InboundMessage",
    "StartCommand",
    "UrlMessage",
    "TextMessage",
    "Unrecognized",
    "classify_update",
    "TelegramBot",
]
