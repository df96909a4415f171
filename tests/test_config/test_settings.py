"""Testes das settings (carga de env, limites e validação)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from config.settings import (
    BaseSettings,
    FirestoreSettings,
    NotificationSettings,
    StorageSettings,
    TelegramSettings,
    get_base_settings,
    get_firestore_settings,
    get_notification_settings,
    get_storage_settings,
    get_telegram_settings,
)

_ENV_VARS = (
    "ENVIRONMENT",
    "GCP_PROJECT",
    "GOOGLE_CLOUD_PROJECT",
    "REDIS_URL",
    "ANNOUNCEMENT_STORE_BACKEND",
    "SUBSCRIBER_STORE_BACKEND",
    "NOTIFY_INTERVAL_MS",
    "NOTIFY_GRACE_MS",
    "NOTIFY_BATCH_SIZE",
    "NOTIFY_DELIVERY_TIMEOUT_SECONDS",
    "NOTIFY_SCHEDULER_ENABLED",
    "ANNOUNCEMENT_TIMEZONE",
    "TELEGRAM_BOT_TOKEN",
    "BOT_TOKEN",
    "TELEGRAM_WEBHOOK_SECRET",
    "FIRESTORE_PROJECT_ID",
)


def _clear_caches() -> None:
    get_base_settings.cache_clear()
    get_storage_settings.cache_clear()
    get_notification_settings.cache_clear()
    get_telegram_settings.cache_clear()
    get_firestore_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield
    _clear_caches()


class TestNotificationSettings:
    """Testes de NotificationSettings."""

    def test_defaults(self) -> None:
        settings = get_notification_settings()
        assert settings.interval_ms == 5000
        assert settings.grace_ms == 0
        assert settings.delivery_timeout_seconds is None
        assert settings.scheduler_enabled is True
        assert settings.validate() == []

    def test_interval_floor_and_negative_grace_are_clamped(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NOTIFY_INTERVAL_MS", "10")
        monkeypatch.setenv("NOTIFY_GRACE_MS", "-50")

        settings = get_notification_settings()

        assert settings.interval_ms == 1000
        assert settings.grace_ms == 0

    def test_unparseable_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTIFY_INTERVAL_MS", "soon")
        monkeypatch.setenv("NOTIFY_DELIVERY_TIMEOUT_SECONDS", "forever")

        settings = get_notification_settings()

        assert settings.interval_ms == 5000
        assert settings.delivery_timeout_seconds is None

    def test_delivery_timeout_and_disable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTIFY_DELIVERY_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("NOTIFY_SCHEDULER_ENABLED", "false")

        settings = get_notification_settings()

        assert settings.delivery_timeout_seconds == 2.5
        assert settings.scheduler_enabled is False

    def test_validate_reports_bad_values(self) -> None:
        settings = NotificationSettings(
            interval_ms=10,
            grace_ms=-1,
            batch_size=0,
            delivery_timeout_seconds=0,
            timezone="Mars/Olympus",
        )

        errors = settings.validate()

        assert len(errors) == 5
        assert any("ANNOUNCEMENT_TIMEZONE" in error for error in errors)

    def test_interval_seconds(self) -> None:
        assert NotificationSettings(interval_ms=1500).interval_seconds == 1.5


class TestTelegramSettings:
    """Testes de TelegramSettings."""

    def test_bot_token_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOT_TOKEN", "legacy")

        settings = get_telegram_settings()

        assert settings.bot_token == "legacy"
        assert settings.enabled is True
        assert settings.api_endpoint == "https://api.telegram.org/botlegacy"

    def test_missing_token(self) -> None:
        settings = TelegramSettings()

        assert settings.enabled is False
        assert settings.validate() == ["TELEGRAM_BOT_TOKEN não configurado"]
        with pytest.raises(ValueError, match="bot_token"):
            _ = settings.api_endpoint


class TestStorageSettings:
    """Testes de StorageSettings."""

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANNOUNCEMENT_STORE_BACKEND", "postgres")

        assert get_storage_settings().announcement_backend == "memory"

    def test_memory_allowed_in_development(self) -> None:
        assert StorageSettings().validate(BaseSettings()) == []

    def test_memory_rejected_in_production(self) -> None:
        errors = StorageSettings().validate(BaseSettings(environment="production"))
        assert len(errors) == 2

    def test_remote_backends_need_credentials(self) -> None:
        storage = StorageSettings(announcement_backend="firestore", subscriber_backend="redis")

        errors = storage.validate(BaseSettings())

        assert any("GCP_PROJECT" in error for error in errors)
        assert any("REDIS_URL" in error for error in errors)

        configured = BaseSettings(gcp_project="proj", redis_url="redis://localhost:6379/0")
        assert storage.validate(configured) == []


class TestBaseSettings:
    """Testes de BaseSettings."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("stage", "staging"), ("anything", "development")],
    )
    def test_environment_aliases(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert get_base_settings().environment == expected

    def test_gcp_project_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "fallback")
        assert get_base_settings().gcp_project == "fallback"


class TestFirestoreSettings:
    """Testes de FirestoreSettings."""

    def test_project_from_base(self) -> None:
        assert FirestoreSettings().validate("proj") == []

    def test_requires_project(self) -> None:
        assert FirestoreSettings().validate("") == [
            "FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado"
        ]

    def test_collections_must_differ(self) -> None:
        settings = FirestoreSettings(
            project_id="p", collection_announcements="x", collection_instants="x"
        )
        assert len(settings.validate("")) == 1
