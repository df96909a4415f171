"""MessageSink que envia anúncios para todos os assinantes Telegram."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.message_sink import DeliveryResult
from utils.errors import TelegramDeliveryError

if TYPE_CHECKING:
    from app.infra.telegram.client import TelegramClient
    from app.protocols.subscriber_store import SubscriberStoreProtocol

logger = logging.getLogger(__name__)


def format_announcement(name: str, message: str) -> str:
    return f"📣 {name}\n{message}"


class TelegramBroadcastSink:
    """Fan-out sequencial para cada chat registrado.

    Falha em um chat não interrompe os demais. A entrega só é
    considerada falha quando não foi possível ler os assinantes ou
    quando nenhum envio deu certo. Sem assinantes conta como sucesso.
    """

    def __init__(
        self,
        client: TelegramClient,
        subscribers: SubscriberStoreProtocol,
    ) -> None:
        self._client = client
        self._subscribers = subscribers

    async def deliver(self, name: str, message: str) -> DeliveryResult:
        try:
            chat_ids = await self._subscribers.all_chat_ids()
        except Exception as exc:
            logger.error(
                "broadcast_subscribers_unavailable",
                extra={"error_type": type(exc).__name__},
            )
            return DeliveryResult.failure("subscribers_unavailable")

        if not chat_ids:
            logger.info("broadcast_no_subscribers")
            return DeliveryResult(success=True)

        text = format_announcement(name, message)
        sent = 0
        failed = 0
        for chat_id in chat_ids:
            try:
                await self._client.send_message(chat_id, text)
            except TelegramDeliveryError as exc:
                failed += 1
                logger.warning(
                    "telegram_send_failed",
                    extra={"status_code": exc.status_code, "error": str(exc)},
                )
                continue
            sent += 1

        if sent == 0:
            return DeliveryResult.failure("all_sends_failed", failed_recipients=failed)

        logger.info("broadcast_sent", extra={"recipients": sent, "failed_recipients": failed})
        return DeliveryResult(success=True, recipients=sent, failed_recipients=failed)
