"""MessageSink local para desenvolvimento sem bot configurado."""

from __future__ import annotations

import logging

from app.protocols.message_sink import DeliveryResult

logger = logging.getLogger(__name__)


class LoggingMessageSink:
    """Registra a entrega em log em vez de enviar (conteúdo não é logado)."""

    def __init__(self) -> None:
        self.delivered: list[tuple[str, str]] = []

    async def deliver(self, name: str, message: str) -> DeliveryResult:
        self.delivered.append((name, message))
        logger.info(
            "announcement_delivery_logged",
            extra={"name_length": len(name), "message_length": len(message)},
        )
        return DeliveryResult(success=True, recipients=0)
