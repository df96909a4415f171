"""Integração com a Telegram Bot API."""

from app.infra.telegram.broadcast_sink import TelegramBroadcastSink, format_announcement
from app.infra.telegram.client import TelegramClient

__all__ = ["TelegramBroadcastSink", "TelegramClient", "format_announcement"]
