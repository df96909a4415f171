"""Testes de validate_runtime_settings e collect_settings_errors."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.bootstrap import collect_settings_errors, validate_runtime_settings
from config.settings import (
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
    "TELEGRAM_BOT_TOKEN",
    "BOT_TOKEN",
    "FIRESTORE_PROJECT_ID",
    "ANNOUNCEMENT_TIMEZONE",
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


def test_development_defaults_are_valid() -> None:
    assert collect_settings_errors() == []
    validate_runtime_settings()


def test_development_only_warns(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANNOUNCEMENT_TIMEZONE", "Nowhere/Land")

    errors = collect_settings_errors()

    assert errors == ["notifications: ANNOUNCEMENT_TIMEZONE inválido: Nowhere/Land"]
    validate_runtime_settings()


def test_production_with_memory_backends_fails_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")

    with pytest.raises(RuntimeError, match="production") as exc_info:
        validate_runtime_settings()

    message = str(exc_info.value)
    assert "storage: ANNOUNCEMENT_STORE_BACKEND=memory" in message
    assert "telegram: TELEGRAM_BOT_TOKEN não configurado" in message


def test_production_fully_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("GCP_PROJECT", "proj")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.setenv("ANNOUNCEMENT_STORE_BACKEND", "firestore")
    monkeypatch.setenv("SUBSCRIBER_STORE_BACKEND", "redis")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")

    assert collect_settings_errors() == []
    validate_runtime_settings()


def test_firestore_checked_only_when_selected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANNOUNCEMENT_STORE_BACKEND", "firestore")

    errors = collect_settings_errors()

    assert any(error.startswith("firestore: ") for error in errors)
    assert any(error.startswith("storage: ") for error in errors)
