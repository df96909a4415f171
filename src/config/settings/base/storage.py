"""Settings de persistência de anúncios e assinantes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

AnnouncementStoreBackend = Literal["memory", "firestore"]
SubscriberStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class StorageSettings:
    """Backends de armazenamento.

    Attributes:
        announcement_backend: Backend de anúncios/instantes e perguntas (memory|firestore)
        subscriber_backend: Backend do registro de assinantes (memory|redis)
    """

    announcement_backend: AnnouncementStoreBackend = "memory"
    subscriber_backend: SubscriberStoreBackend = "memory"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida backends contra o ambiente.

        Args:
            base: BaseSettings para verificar ambiente e credenciais.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.announcement_backend not in {"memory", "firestore"}:
            errors.append(f"ANNOUNCEMENT_STORE_BACKEND inválido: {self.announcement_backend}")
        if self.subscriber_backend not in {"memory", "redis"}:
            errors.append(f"SUBSCRIBER_STORE_BACKEND inválido: {self.subscriber_backend}")

        if self.announcement_backend == "memory" and not base.is_development:
            errors.append(
                "ANNOUNCEMENT_STORE_BACKEND=memory proibido em staging/production. "
                "Use Firestore."
            )
        if self.subscriber_backend == "memory" and not base.is_development:
            errors.append("SUBSCRIBER_STORE_BACKEND=memory proibido em staging/production")

        if self.announcement_backend == "firestore" and not base.gcp_project:
            errors.append("ANNOUNCEMENT_STORE_BACKEND=firestore requer GCP_PROJECT configurado")
        if self.subscriber_backend == "redis" and not base.redis_url:
            errors.append("SUBSCRIBER_STORE_BACKEND=redis requer REDIS_URL configurado")

        return errors


def _load_storage_from_env() -> StorageSettings:
    """Carrega StorageSettings de variáveis de ambiente."""
    announcement_str = os.getenv("ANNOUNCEMENT_STORE_BACKEND", "memory").lower()
    announcement_backend: AnnouncementStoreBackend = (
        "firestore" if announcement_str == "firestore" else "memory"
    )
    subscriber_str = os.getenv("SUBSCRIBER_STORE_BACKEND", "memory").lower()
    subscriber_backend: SubscriberStoreBackend = (
        "redis" if subscriber_str == "redis" else "memory"
    )
    return StorageSettings(
        announcement_backend=announcement_backend,
        subscriber_backend=subscriber_backend,
    )


@lru_cache(maxsize=1)
def get_storage_settings() -> StorageSettings:
    """Retorna instância cacheada de StorageSettings."""
    return _load_storage_from_env()
