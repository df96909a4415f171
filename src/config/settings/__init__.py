"""Agregador de settings do Atende RH.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    AnnouncementStoreBackend,
    BaseSettings,
    Environment,
    StorageSettings,
    SubscriberStoreBackend,
    get_base_settings,
    get_storage_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

# Scheduler settings
from config.settings.notifications import (
    MIN_INTERVAL_MS,
    NotificationSettings,
    get_notification_settings,
)

# Channel-specific settings
from config.settings.telegram import (
    TELEGRAM_API_BASE_URL,
    TelegramSettings,
    get_telegram_settings,
)

__all__ = [
    # Constants
    "MIN_INTERVAL_MS",
    "TELEGRAM_API_BASE_URL",
    # Base
    "AnnouncementStoreBackend",
    "BaseSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    # Scheduler
    "NotificationSettings",
    "StorageSettings",
    "SubscriberStoreBackend",
    # Channels
    "TelegramSettings",
    "get_base_settings",
    "get_firestore_settings",
    "get_notification_settings",
    "get_storage_settings",
    "get_telegram_settings",
]
