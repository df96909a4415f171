"""Webhook do bot Telegram.

POST /webhook/telegram: todo update recebido registra o chat de
origem como assinante (idempotente).

Segurança:
- Com TELEGRAM_WEBHOOK_SECRET definido, o header
  X-Telegram-Bot-Api-Secret-Token precisa coincidir (403 caso contrário).
- Falha do store responde 500 para que o Telegram reenvie o update.
"""

from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.normalizers.telegram import extract_chat_id
from api.routes.dependencies import get_dependencies
from app.bootstrap.dependencies import AppDependencies
from app.observability import reset_correlation_id, set_correlation_id
from config.settings import get_telegram_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SECRET_HEADER = "x-telegram-bot-api-secret-token"


def _secret_matches(request: Request, expected: str) -> bool:
    provided = request.headers.get(SECRET_HEADER, "")
    return hmac.compare_digest(provided.encode(), expected.encode())


@router.post("")
async def receive_update(
    request: Request,
    dependencies: AppDependencies = Depends(get_dependencies),
) -> JSONResponse:
    """Recebe update do Telegram e registra o chat como assinante."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        secret = get_telegram_settings().webhook_secret
        if secret and not _secret_matches(request, secret):
            logger.warning("telegram_webhook_forbidden")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": "invalid_secret_token"},
            )

        try:
            payload = await request.json()
        except ValueError:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "invalid_json"},
            )

        chat_id = extract_chat_id(payload) if isinstance(payload, dict) else None
        if chat_id is None:
            logger.debug("telegram_update_without_chat")
            return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ignored"})

        try:
            await dependencies.subscriber_store.add(chat_id)
        except Exception as exc:
            logger.error(
                "subscriber_register_failed",
                extra={"error_type": type(exc).__name__},
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "subscriber_store_unavailable"},
            )

        logger.info("subscriber_registered")
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "subscribed"})
    finally:
        reset_correlation_id(token)
