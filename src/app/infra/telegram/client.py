"""Cliente mínimo da Telegram Bot API (sendMessage)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from utils.errors import TelegramDeliveryError

if TYPE_CHECKING:
    from config.settings.telegram import TelegramSettings

logger = logging.getLogger(__name__)


class TelegramClient:
    """Envia mensagens de texto para chats do Telegram.

    Args:
        api_endpoint: URL base com token ("https://api.telegram.org/bot<token>")
        http_client: HttpClient com retry/backoff
    """

    def __init__(self, api_endpoint: str, http_client: HttpClient | None = None) -> None:
        self._api_endpoint = api_endpoint.rstrip("/")
        self._http = http_client or HttpClient()

    @classmethod
    def from_settings(cls, settings: TelegramSettings) -> TelegramClient:
        config = HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
        )
        return cls(settings.api_endpoint, HttpClient(config))

    async def send_message(self, chat_id: str, text: str) -> dict[str, Any]:
        """Envia `text` para `chat_id`.

        Returns:
            Objeto `result` devolvido pela API (a mensagem enviada).

        Raises:
            TelegramDeliveryError: Erro HTTP, de conexão ou `ok=false`.
        """
        try:
            response = await self._http.post_json(
                f"{self._api_endpoint}/sendMessage",
                {"chat_id": chat_id, "text": text},
            )
        except HttpError as exc:
            raise TelegramDeliveryError(str(exc), status_code=exc.status_code) from exc

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400 or not body.get("ok", False):
            description = body.get("description") or "telegram_request_failed"
            raise TelegramDeliveryError(str(description), status_code=response.status_code)
        return body.get("result") or {}
