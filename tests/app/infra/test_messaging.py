"""Testes do LoggingMessageSink."""

from __future__ import annotations

import pytest

from app.infra.messaging import LoggingMessageSink


@pytest.mark.asyncio
async def test_logging_sink_records_and_succeeds() -> None:
    sink = LoggingMessageSink()

    result = await sink.deliver("A", "m")

    assert result.success
    assert sink.delivered == [("A", "m")]
