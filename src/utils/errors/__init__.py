"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AnnouncementPersistError,
    FirestoreUnavailableError,
    InfrastructureError,
    IngestionError,
    RedisConnectionError,
    TelegramDeliveryError,
)

__all__ = [
    "AnnouncementPersistError",
    "FirestoreUnavailableError",
    "InfrastructureError",
    "IngestionError",
    "RedisConnectionError",
    "TelegramDeliveryError",
]
