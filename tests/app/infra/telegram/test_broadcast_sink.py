"""Testes do TelegramBroadcastSink."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.stores.memory_stores import MemorySubscriberStore
from app.infra.telegram.broadcast_sink import TelegramBroadcastSink, format_announcement
from utils.errors import TelegramDeliveryError


async def _subscribers(*chat_ids: str) -> MemorySubscriberStore:
    store = MemorySubscriberStore()
    for chat_id in chat_ids:
        await store.add(chat_id)
    return store


class TestTelegramBroadcastSink:
    """Testes do fan-out para assinantes."""

    def test_format(self) -> None:
        assert format_announcement("Reunião", "Sala 3") == "📣 Reunião\nSala 3"

    @pytest.mark.asyncio
    async def test_sends_to_every_subscriber(self) -> None:
        client = MagicMock()
        client.send_message = AsyncMock(return_value={})
        sink = TelegramBroadcastSink(client, await _subscribers("1", "2"))

        result = await sink.deliver("Reunião", "Sala 3")

        assert result.success
        assert result.recipients == 2
        assert [c.args for c in client.send_message.await_args_list] == [
            ("1", "📣 Reunião\nSala 3"),
            ("2", "📣 Reunião\nSala 3"),
        ]

    @pytest.mark.asyncio
    async def test_partial_failure_is_success(self) -> None:
        client = MagicMock()
        client.send_message = AsyncMock(
            side_effect=[TelegramDeliveryError("blocked", status_code=403), {}]
        )
        sink = TelegramBroadcastSink(client, await _subscribers("1", "2"))

        result = await sink.deliver("A", "m")

        assert result.success
        assert (result.recipients, result.failed_recipients) == (1, 1)

    @pytest.mark.asyncio
    async def test_all_failed_is_failure(self) -> None:
        client = MagicMock()
        client.send_message = AsyncMock(side_effect=TelegramDeliveryError("down", status_code=502))
        sink = TelegramBroadcastSink(client, await _subscribers("1", "2"))

        result = await sink.deliver("A", "m")

        assert not result.success
        assert result.error_code == "all_sends_failed"
        assert result.failed_recipients == 2

    @pytest.mark.asyncio
    async def test_no_subscribers_is_success(self) -> None:
        client = MagicMock()
        client.send_message = AsyncMock()
        sink = TelegramBroadcastSink(client, MemorySubscriberStore())

        result = await sink.deliver("A", "m")

        assert result.success
        assert result.recipients == 0
        client.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreadable_subscribers_is_failure(self) -> None:
        subscribers = MagicMock()
        subscribers.all_chat_ids = AsyncMock(side_effect=ConnectionError("redis down"))
        sink = TelegramBroadcastSink(MagicMock(), subscribers)

        result = await sink.deliver("A", "m")

        assert not result.success
        assert result.error_code == "subscribers_unavailable"
