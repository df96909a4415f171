"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - firestore_announcement_store: Anúncios e instantes usando Firestore
    - firestore_question_store: Perguntas frequentes usando Firestore
    - redis_subscriber_store: Registro de assinantes usando Redis
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_announcement_store import FirestoreAnnouncementStore
from app.infra.stores.firestore_question_store import FirestoreQuestionStore
from app.infra.stores.memory_stores import (
    MemoryAnnouncementStore,
    MemoryQuestionStore,
    MemorySubscriberStore,
)
from app.infra.stores.redis_subscriber_store import RedisSubscriberStore

__all__ = [
    # Firestore
    "FirestoreAnnouncementStore",
    "FirestoreQuestionStore",
    # Memory (dev/test)
    "MemoryAnnouncementStore",
    "MemoryQuestionStore",
    "MemorySubscriberStore",
    # Redis
    "RedisSubscriberStore",
]
