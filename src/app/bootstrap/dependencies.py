"""Factories de dependências — criação de implementações concretas.

Centraliza a escolha de backends a partir das settings de ambiente e
conecta stores, sink, ingestor e scheduler aos seus protocolos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.messaging import LoggingMessageSink
from app.infra.stores import (
    FirestoreAnnouncementStore,
    FirestoreQuestionStore,
    MemoryAnnouncementStore,
    MemoryQuestionStore,
    MemorySubscriberStore,
    RedisSubscriberStore,
)
from app.infra.telegram import TelegramBroadcastSink, TelegramClient
from app.services.notification_scheduler import NotificationScheduler
from app.services.sheet_ingestor import SheetIngestor
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_notification_settings,
    get_storage_settings,
    get_telegram_settings,
)

if TYPE_CHECKING:
    from app.protocols.announcement_store import AnnouncementStoreProtocol
    from app.protocols.message_sink import MessageSinkProtocol
    from app.protocols.question_store import QuestionStoreProtocol
    from app.protocols.subscriber_store import SubscriberStoreProtocol

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Store Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_announcement_store() -> AnnouncementStoreProtocol:
    """Cria store de anúncios conforme ANNOUNCEMENT_STORE_BACKEND.

    - "memory": MemoryAnnouncementStore (dev only)
    - "firestore": FirestoreAnnouncementStore
    """
    backend = get_storage_settings().announcement_backend

    if backend == "firestore":
        firestore_settings = get_firestore_settings()
        store: AnnouncementStoreProtocol = FirestoreAnnouncementStore(
            create_firestore_client(),
            announcements_collection=firestore_settings.collection_announcements,
            instants_collection=firestore_settings.collection_instants,
        )
        logger.info("announcement_store_created", extra={"backend": "firestore"})
        return store

    if not get_base_settings().is_development:
        logger.warning("memory_store_in_non_dev", extra={"backend": "memory"})
    logger.info("announcement_store_created", extra={"backend": "memory"})
    return MemoryAnnouncementStore()


def create_question_store() -> QuestionStoreProtocol:
    """Cria store de perguntas; segue o backend de anúncios."""
    if get_storage_settings().announcement_backend == "firestore":
        store: QuestionStoreProtocol = FirestoreQuestionStore(
            create_firestore_client(),
            collection=get_firestore_settings().collection_questions,
        )
        logger.info("question_store_created", extra={"backend": "firestore"})
        return store

    logger.info("question_store_created", extra={"backend": "memory"})
    return MemoryQuestionStore()


def create_subscriber_store() -> SubscriberStoreProtocol:
    """Cria registro de assinantes conforme SUBSCRIBER_STORE_BACKEND."""
    backend = get_storage_settings().subscriber_backend

    if backend == "redis":
        store: SubscriberStoreProtocol = RedisSubscriberStore(create_async_redis_client())
        logger.info("subscriber_store_created", extra={"backend": "redis"})
        return store

    if not get_base_settings().is_development:
        logger.warning("memory_store_in_non_dev", extra={"backend": "memory"})
    logger.info("subscriber_store_created", extra={"backend": "memory"})
    return MemorySubscriberStore()


# ──────────────────────────────────────────────────────────────────────────────
# Service Factories
# ──────────────────────────────────────────────────────────────────────────────


def create_message_sink(subscribers: SubscriberStoreProtocol) -> MessageSinkProtocol:
    """Cria sink de entrega.

    Sem TELEGRAM_BOT_TOKEN em desenvolvimento, usa LoggingMessageSink.

    Raises:
        ValueError: Sem token fora de desenvolvimento.
    """
    telegram_settings = get_telegram_settings()
    if telegram_settings.enabled:
        sink = TelegramBroadcastSink(TelegramClient.from_settings(telegram_settings), subscribers)
        logger.info("message_sink_created", extra={"sink": "telegram"})
        return sink

    if not get_base_settings().is_development:
        msg = "TELEGRAM_BOT_TOKEN não configurado"
        raise ValueError(msg)
    logger.warning("message_sink_created", extra={"sink": "logging"})
    return LoggingMessageSink()


def create_sheet_ingestor(store: AnnouncementStoreProtocol) -> SheetIngestor:
    """Cria ingestor de planilhas no fuso ANNOUNCEMENT_TIMEZONE."""
    return SheetIngestor(store, timezone=get_notification_settings().tzinfo)


def create_notification_scheduler(
    store: AnnouncementStoreProtocol,
    sink: MessageSinkProtocol,
) -> NotificationScheduler:
    """Cria scheduler a partir de NotificationSettings (não inicia o loop)."""
    return NotificationScheduler.from_settings(store, sink, get_notification_settings())


@dataclass
class AppDependencies:
    """Grafo de dependências montado no startup."""

    announcement_store: AnnouncementStoreProtocol
    subscriber_store: SubscriberStoreProtocol
    question_store: QuestionStoreProtocol
    message_sink: MessageSinkProtocol
    sheet_ingestor: SheetIngestor
    scheduler: NotificationScheduler


def build_dependencies() -> AppDependencies:
    """Monta stores, sink, ingestor e scheduler a partir do ambiente."""
    announcement_store = create_announcement_store()
    subscriber_store = create_subscriber_store()
    message_sink = create_message_sink(subscriber_store)
    return AppDependencies(
        announcement_store=announcement_store,
        subscriber_store=subscriber_store,
        question_store=create_question_store(),
        message_sink=message_sink,
        sheet_ingestor=create_sheet_ingestor(announcement_store),
        scheduler=create_notification_scheduler(announcement_store, message_sink),
    )
