"""Redis Subscriber Store — registro de assinantes de anúncios.

Um único SET guarda os chat ids; SADD torna o registro idempotente,
então todo update recebido pode registrar o chat sem checagem prévia.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.subscriber_store import SubscriberStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

SUBSCRIBERS_KEY = "subscribers:chat_ids"


class RedisSubscriberStore(SubscriberStoreProtocol):
    """Registro de assinantes usando Redis.

    Args:
        async_redis_client: Cliente Redis assíncrono
        key: Chave do SET de chat ids
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis[bytes],
        key: str = SUBSCRIBERS_KEY,
    ) -> None:
        self._redis = async_redis_client
        self._key = key

    async def add(self, chat_id: str) -> None:
        try:
            added = await self._redis.sadd(self._key, str(chat_id))
        except Exception as exc:
            raise RedisConnectionError("Falha ao registrar assinante no Redis") from exc
        if added:
            logger.info("subscriber_registered")

    async def all_chat_ids(self) -> list[str]:
        try:
            members = await self._redis.smembers(self._key)
        except Exception as exc:
            raise RedisConnectionError("Falha ao listar assinantes no Redis") from exc
        return sorted(m.decode() if isinstance(m, bytes) else str(m) for m in members)
