"""Protocolo do registro de assinantes (chats que recebem anúncios)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SubscriberStoreProtocol(ABC):
    """Contrato assíncrono do registro de assinantes.

    chat_id é sempre string: ids de supergrupo do Telegram (-100...)
    não podem perder precisão.
    """

    @abstractmethod
    async def add(self, chat_id: str) -> None:
        """Registra assinante (idempotente)."""

    @abstractmethod
    async def all_chat_ids(self) -> list[str]:
        """Todos os chat ids registrados."""
