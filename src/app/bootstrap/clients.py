"""Clientes de infraestrutura compartilhados pelo processo.

Redis guarda o registro de assinantes do Telegram (SUBSCRIBER_STORE_BACKEND
=redis). Firestore guarda anúncios, instantes e perguntas frequentes
(ANNOUNCEMENT_STORE_BACKEND=firestore). Cada cliente é criado uma vez, na
primeira store que precisar dele; app.app fecha o Redis no shutdown.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings, get_firestore_settings

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

REDIS_TIMEOUT_SECONDS = 5.0


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis[bytes]:
    """Cliente do registro de assinantes; exige REDIS_URL."""
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        raise ValueError("REDIS_URL não configurado para o registro de assinantes")

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=REDIS_TIMEOUT_SECONDS,
        socket_connect_timeout=REDIS_TIMEOUT_SECONDS,
    )
    logger.info("subscriber_redis_client_created")
    return client


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Cliente dos anúncios e perguntas.

    FIRESTORE_PROJECT_ID tem precedência sobre GCP_PROJECT; sem nenhum dos
    dois o SDK resolve o projeto pelas credenciais do ambiente.
    """
    from google.cloud import firestore

    project_id = get_firestore_settings().project_id or get_base_settings().gcp_project or None
    client = firestore.Client(project=project_id)
    logger.info("firestore_client_created", extra={"project": project_id})
    return client
