"""Telegram Bot API client for chat notifications."""

from pool_monitor.clients.telegram.client import TelegramClient
from pool_monitor.clients.telegram.exceptions import (
    TelegramAPIError,
    TelegramError,
    TelegramTransportError,
)

__all__ = [
    "TelegramAPIError",
    "TelegramClient",
    "TelegramError",
    "TelegramTransportError",
]
